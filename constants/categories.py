"""
Category and Unit Inference Tables

Keyword tables used when a brand-new ingredient is created from an
unmatched observation. Order matters: the first category whose keyword
appears in the name wins.
"""

# (category, keywords) in priority order
CATEGORY_KEYWORDS = (
    ('meat', ('고기', '돼지', '소고기', '닭', '오리', '양고기', '삼겹', '목살', '안심', '등심', '갈비',
              'pork', 'beef', 'chicken', 'duck', 'lamb', 'bacon')),
    ('seafood', ('생선', '새우', '오징어', '조개', '굴', '게', '문어', '낙지', '꽃게', '전복', '멸치',
                 '고등어', '삼치', '갈치', 'fish', 'shrimp', 'squid', 'clam', 'oyster', 'crab')),
    ('produce', ('양파', '마늘', '대파', '쪽파', '배추', '무', '당근', '감자', '고구마', '호박', '오이', '토마토',
                 '상추', '시금치', '버섯', '콩나물', '숙주', '양배추', '브로콜리', '피망', '고추',
                 'onion', 'garlic', 'cabbage', 'carrot', 'potato', 'tomato', 'mushroom', 'pepper')),
    ('fruit', ('사과', '배', '귤', '오렌지', '포도', '딸기', '수박', '참외', '멜론', '바나나', '레몬', '라임',
               'apple', 'orange', 'grape', 'strawberry', 'banana', 'lemon', 'lime')),
    ('seasoning', ('간장', '된장', '고추장', '소금', '설탕', '식초', '참기름', '들기름', '올리브', '케첩',
                   '마요네즈', '겨자', '후추', '고춧가루', '카레', 'salt', 'sugar', 'vinegar', 'sauce')),
    ('dairy', ('우유', '치즈', '버터', '크림', '요거트', '요구르트', 'milk', 'cheese', 'butter', 'cream')),
    ('grain', ('쌀', '밀가루', '빵', '면', '국수', '파스타', '라면', '보리', '현미', '찹쌀',
               'rice', 'flour', 'bread', 'noodle', 'pasta')),
    ('processed', ('햄', '소시지', '베이컨', '어묵', '두부', '김치', '단무지', 'ham', 'sausage', 'tofu')),
    ('beverage', ('물', '콜라', '사이다', '주스', '커피', '차', '맥주', '소주', '와인',
                  'water', 'cola', 'juice', 'coffee', 'tea', 'beer', 'wine')),
)

DEFAULT_CATEGORY = 'other'

# (unit, keywords) checked in order when the name carries no explicit unit
UNIT_DEFAULT_KEYWORDS = (
    ('kg', ('고기', '돼지', '소', '닭', '삼겹', '목살', 'pork', 'beef', 'chicken')),
    ('kg', ('양파', '마늘', '감자', '고구마', '당근', '무', 'onion', 'potato', 'carrot')),
    ('개', ('계란', '달걀', 'egg')),
    ('ml', ('우유', '음료', '주스', '물', 'milk', 'juice', 'water')),
)

DEFAULT_UNIT = 'kg'
