"""
Demo directory content loaded into every new session.

There is no persistence: the store starts from these records and anything
added during the session is lost when the process exits.

The ``AVAILABLE_*`` lists are suggestions for form pick-lists only; entity
data is not validated against them.
"""

from __future__ import annotations

from fruitlink.models.entity import Buyer, PriceRange, Supplier
from fruitlink.taxonomy.trade_taxonomy import Volume


def seed_suppliers() -> list[Supplier]:
    return [
        Supplier(
            id="1",
            name="PT Nusantara Segar Abadi",
            location="Indonesia",
            country="Indonesia",
            fruits_offered=["banana"],
            certifications=["GLOBALG.A.P", "Organic", "Fair Trade"],
            contact_email="info@nusantarasegarabadi.com",
            contact_phone="+62-21-0000-0001",
            description="Leading Indonesian banana supplier",
            price_range={"banana": PriceRange(min=1.2, max=2.0)},
            reliability=90,
            established=2010,
        ),
        Supplier(
            id="2",
            name="Colombian Fruits and Minerals",
            location="Colombia",
            country="Colombia",
            fruits_offered=["limes", "apple"],
            certifications=["GLOBALG.A.P", "BRC", "Rainforest Alliance"],
            contact_email="info@colombianfruits.com",
            contact_phone="+57-1-0000-0002",
            description="Colombian exporter of fresh limes",
            price_range={"limes": PriceRange(min=0.8, max=1.5)},
            reliability=88,
            established=2012,
        ),
        Supplier(
            id="3",
            name="Vitassous",
            location="Colombia",
            country="Colombia",
            fruits_offered=["raspberry"],
            certifications=["GLOBALG.A.P", "Organic", "IFS"],
            contact_email="info@vitassous.com",
            contact_phone="+57-1-0000-0003",
            description="Colombian raspberry supplier",
            price_range={"raspberry": PriceRange(min=2.5, max=4.0)},
            reliability=85,
            established=2015,
        ),
        Supplier(
            id="4",
            name="Truong Ton",
            location="Vietnam",
            country="Vietnam",
            fruits_offered=["banana"],
            certifications=["GLOBALG.A.P", "HACCP"],
            contact_email="info@truongton.vn",
            contact_phone="+84-28-0000-0004",
            description="Vietnamese banana exporter",
            price_range={"banana": PriceRange(min=1.1, max=1.9)},
            reliability=87,
            established=2011,
        ),
    ]


def seed_buyers() -> list[Buyer]:
    return [
        Buyer(
            id="1",
            name="PT Sewu Segar Nusantara",
            location="Indonesia",
            country="Indonesia",
            fruits_interested=["banana", "mango"],
            certifications=["GLOBALG.A.P", "Fair Trade"],
            contact_email="buyer@sewusegar.com",
            contact_phone="+62-21-1000-0001",
            description="Indonesian buyer of bananas",
            budget_range={"banana": PriceRange(min=1.3, max=2.2)},
            volume=Volume.LARGE,
            established=2008,
        ),
        Buyer(
            id="2",
            name="Hacienda Sotomayor SL",
            location="Spain",
            country="Spain",
            fruits_interested=["limes"],
            certifications=["Organic", "BRC"],
            contact_email="buyer@haciendasotomayor.es",
            contact_phone="+34-91-000-0002",
            description="Spanish buyer of limes",
            budget_range={"limes": PriceRange(min=1.0, max=1.8, currency="EUR")},
            volume=Volume.MEDIUM,
            established=2010,
        ),
        Buyer(
            id="3",
            name="BAN CHOON MARKETING PTE LTD",
            location="Singapore",
            country="Singapore",
            fruits_interested=["raspberry"],
            certifications=["IFS", "GLOBALG.A.P"],
            contact_email="buyer@banchoon.com.sg",
            contact_phone="+65-6000-0003",
            description="Singaporean buyer of raspberries and blueberries",
            budget_range={
                "raspberry": PriceRange(min=2.8, max=4.5),
                "blueberry": PriceRange(min=3.0, max=5.0),
            },
            volume=Volume.MEDIUM,
            established=2005,
        ),
        Buyer(
            id="4",
            name="Wismettac",
            location="Japan",
            country="Japan",
            fruits_interested=["banana"],
            certifications=["GLOBALG.A.P", "SQF"],
            contact_email="buyer@wismettac.co.jp",
            contact_phone="+81-3-0000-0004",
            description="Japanese buyer of bananas",
            budget_range={"banana": PriceRange(min=1.4, max=2.3)},
            volume=Volume.LARGE,
            established=1995,
        ),
    ]


AVAILABLE_FRUITS: tuple[str, ...] = (
    "mango", "durian", "rambutan", "banana", "pineapple", "coconut",
    "dragon fruit", "lychee", "longan", "papaya", "jackfruit", "mangosteen",
)

AVAILABLE_COUNTRIES: tuple[str, ...] = (
    "Thailand", "Philippines", "Vietnam", "Singapore", "Japan", "Netherlands",
    "Malaysia", "Indonesia", "India", "Australia", "USA", "Germany",
)

AVAILABLE_CERTIFICATIONS: tuple[str, ...] = (
    "GLOBALG.A.P", "Organic", "GMP", "Rainforest Alliance", "VietGAP",
    "HACCP", "BRC", "SQF", "IFS", "Fair Trade",
)
