"""言葉遊び: wordplay that leans on Japanese."""

ID = "4"
TITLE = "言葉遊び"
DESCRIPTION = "日本語の特性を活かした言葉の謎解き。ひらめきと知識が必要です。"
THUMBNAIL = "images/puzzles/wordplay.jpg"
IS_ACTIVE = True
CREATED_BY = "Anonymous-55667788"
CREATED_AT = "2024-01-12T14:20:00Z"

QUESTIONS = [
    {"order": 1, "image": "images/questions/4-1.jpg", "format": ["ひらがな"],
     "answer": "たぬき", "alternatives": ["狸"]},
    {"order": 2, "image": "images/questions/4-2.jpg", "format": ["漢字"],
     "answer": "山", "alternatives": ["やま"]},
    {"order": 3, "image": "images/questions/4-3.jpg", "format": ["文字列"],
     "answer": "すいか", "alternatives": ["スイカ", "西瓜"]},
]
