"""図形の規則: spot the rule behind the shapes."""

ID = "3"
TITLE = "図形の規則"
DESCRIPTION = "図形の配置から隠れた規則を発見しよう。空間認識能力が問われます。"
THUMBNAIL = "images/puzzles/shapes.jpg"
IS_ACTIVE = True
CREATED_BY = "Anonymous-11223344"
CREATED_AT = "2024-01-13T09:15:00Z"

QUESTIONS = [
    {"order": 1, "image": "images/questions/3-1.jpg", "format": ["数字"],
     "answer": "8", "alternatives": ["八"]},
    {"order": 2, "image": "images/questions/3-2.jpg", "format": ["英語"],
     "answer": "triangle", "alternatives": ["さんかく", "三角"]},
    {"order": 3, "image": "images/questions/3-3.jpg", "format": ["英語"],
     "answer": "hexagon", "alternatives": ["六角形"]},
]
