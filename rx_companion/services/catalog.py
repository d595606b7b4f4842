# rx_companion/services/catalog.py
"""Static mock data for the supplement, pharmacy and appointment screens."""
from datetime import date
from typing import List, Optional

from rx_companion.schemas.models import Appointment, Pharmacy, Supplement
from rx_companion.utils.dates import add_days, days_until, today_local

CATEGORIES = [
    {"id": "all", "name": "전체", "icon": "📋"},
    {"id": "heart", "name": "심혈관", "icon": "❤️"},
    {"id": "bone", "name": "뼈/관절", "icon": "🦴"},
    {"id": "eye", "name": "눈 건강", "icon": "👁️"},
    {"id": "brain", "name": "두뇌", "icon": "🧠"},
    {"id": "immunity", "name": "면역력", "icon": "🛡️"},
]

SUPPLEMENTS: List[Supplement] = [
    Supplement(id=1, name="오메가-3", category="heart", icon="🐟",
               benefits=["심혈관 건강", "혈액순환 개선", "콜레스테롤 관리"], recommended=True,
               description="중장년층의 심혈관 건강에 도움을 주는 필수 영양제입니다.", dosage="1일 1회, 1캡슐"),
    Supplement(id=2, name="칼슘 + 비타민D", category="bone", icon="🦴",
               benefits=["뼈 건강", "골다공증 예방", "칼슘 흡수 촉진"], recommended=True,
               description="뼈 건강을 유지하고 골다공증을 예방하는데 도움을 줍니다.", dosage="1일 1회, 1정"),
    Supplement(id=3, name="루테인", category="eye", icon="👁️",
               benefits=["눈 건강", "시력 보호", "황반변성 예방"], recommended=True,
               description="눈의 황반 색소 밀도를 높여 눈 건강에 도움을 줍니다.", dosage="1일 1회, 1캡슐"),
    Supplement(id=4, name="코엔자임 Q10", category="heart", icon="💊",
               benefits=["항산화", "에너지 생성", "심장 건강"], recommended=False,
               description="세포의 에너지 생성을 돕고 항산화 작용을 합니다.", dosage="1일 1회, 1캡슐"),
    Supplement(id=5, name="글루코사민", category="bone", icon="🦵",
               benefits=["관절 건강", "연골 보호", "관절 통증 완화"], recommended=False,
               description="관절 연골 건강에 도움을 주는 영양제입니다.", dosage="1일 1~2회, 1정"),
    Supplement(id=6, name="은행잎 추출물", category="brain", icon="🍃",
               benefits=["혈액순환", "기억력 개선", "집중력 향상"], recommended=False,
               description="뇌 혈액순환을 개선하여 기억력과 집중력에 도움을 줍니다.", dosage="1일 1회, 1정"),
    Supplement(id=7, name="홍삼", category="immunity", icon="🌿",
               benefits=["면역력 강화", "피로 회복", "활력 증진"], recommended=True,
               description="면역력 강화와 피로 개선에 도움을 주는 전통 건강식품입니다.", dosage="1일 1~2회"),
    Supplement(id=8, name="비타민 B 복합체", category="immunity", icon="💊",
               benefits=["에너지 생성", "피로 개선", "신경 기능"], recommended=False,
               description="에너지 대사와 피로 개선에 도움을 줍니다.", dosage="1일 1회, 1정"),
]

PHARMACIES: List[Pharmacy] = [
    Pharmacy(id=1, name="24시 중앙약국", address="서울시 강남구 테헤란로 123", phone="02-1234-5678",
             distance="0.3km", is_open=True, hours="24시간 운영", has_parking=True, is_24_hours=True),
    Pharmacy(id=2, name="서울대약국", address="서울시 강남구 역삼동 456", phone="02-2345-6789",
             distance="0.5km", is_open=True, hours="평일 09:00-20:00, 토 09:00-18:00",
             has_parking=False, is_24_hours=False),
    Pharmacy(id=3, name="건강약국", address="서울시 강남구 논현동 789", phone="02-3456-7890",
             distance="0.8km", is_open=False, hours="평일 09:00-19:00, 토 09:00-15:00",
             has_parking=True, is_24_hours=False),
    Pharmacy(id=4, name="우리약국", address="서울시 강남구 삼성동 321", phone="02-4567-8901",
             distance="1.2km", is_open=True, hours="평일 09:00-21:00, 주말 10:00-18:00",
             has_parking=False, is_24_hours=False),
]


def filter_by_category(category: str = "all") -> List[Supplement]:
    if not category or category == "all":
        return list(SUPPLEMENTS)
    return [s for s in SUPPLEMENTS if s.category == category]


def recommended() -> List[Supplement]:
    return [s for s in SUPPLEMENTS if s.recommended]


def search_pharmacies(query: Optional[str] = None) -> List[Pharmacy]:
    q = (query or "").strip().lower()
    if not q:
        return list(PHARMACIES)
    return [p for p in PHARMACIES if q in p.name.lower() or q in p.address.lower()]


def upcoming_appointments(today: Optional[date] = None) -> List[Appointment]:
    today = today or today_local()
    mock = [
        ("apt_1", "서울대병원 내과", add_days(today, 5)),
        ("apt_2", "연세병원 정형외과", add_days(today, 12)),
    ]
    return [
        Appointment(id=aid, hospital=hospital, date=d.isoformat(), days_left=days_until(d.isoformat(), today))
        for aid, hospital, d in mock
    ]
