"""数字の謎: find the hidden number patterns.

Three numeric questions, digits only.
"""

ID = "1"
TITLE = "数字の謎"
DESCRIPTION = "隠された数字のパターンを見つけて答えを導き出そう。論理的思考が試される問題です。"
THUMBNAIL = "images/puzzles/numbers.jpg"
IS_ACTIVE = True
CREATED_BY = "Anonymous-12345678"
CREATED_AT = "2024-01-15T10:00:00Z"

QUESTIONS = [
    {"order": 1, "image": "images/questions/1-1.jpg", "format": ["数字"],
     "answer": "42", "alternatives": ["四十二"]},
    {"order": 2, "image": "images/questions/1-2.jpg", "format": ["数字"],
     "answer": "256", "alternatives": ["二百五十六"]},
    {"order": 3, "image": "images/questions/1-3.jpg", "format": ["数字"],
     "answer": "17", "alternatives": ["十七"]},
]
