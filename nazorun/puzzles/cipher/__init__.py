"""文字の暗号: decode substitution and placement ciphers.

Four kana questions; the first accepts either script.
"""

ID = "2"
TITLE = "文字の暗号"
DESCRIPTION = "暗号化された文字列を解読せよ。古典的な暗号技術を使った謎解きです。"
THUMBNAIL = "images/puzzles/cipher.jpg"
IS_ACTIVE = True
CREATED_BY = "Anonymous-87654321"
CREATED_AT = "2024-01-14T15:30:00Z"

QUESTIONS = [
    {"order": 1, "image": "images/questions/2-1.jpg", "format": ["ひらがな", "カタカナ"],
     "answer": "なぞとき", "alternatives": ["ナゾトキ", "なぞ解き"]},
    {"order": 2, "image": "images/questions/2-2.jpg", "format": ["ひらがな"],
     "answer": "あんごう", "alternatives": []},
    {"order": 3, "image": "images/questions/2-3.jpg", "format": ["カタカナ"],
     "answer": "カギ", "alternatives": ["かぎ", "鍵"]},
    {"order": 4, "image": "images/questions/2-4.jpg", "format": ["ひらがな"],
     "answer": "ひみつ", "alternatives": ["秘密"]},
]
