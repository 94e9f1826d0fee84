"""論理パズル: withdrawn; kept so its runs still resolve."""

ID = "5"
TITLE = "論理パズル"
DESCRIPTION = "条件を整理して正解を導く論理パズル。推理力が試されます。"
THUMBNAIL = "images/puzzles/logic.jpg"
IS_ACTIVE = False
CREATED_BY = "Anonymous-99887766"
CREATED_AT = "2024-01-11T11:45:00Z"

QUESTIONS = [
    {"order": 1, "image": "images/questions/5-1.jpg", "format": ["英語"],
     "answer": "knight", "alternatives": []},
]
