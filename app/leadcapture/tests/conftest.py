import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


ACME_CARD = "John Smith\nAcme Trading Co.\nShanghai City\nPh: +86 138 0013 8000\njohn@acme.com\nwww.acme.com"

ADDRESS_FIRST_CARD = (
    "Room 1205, Tower B, 88 Century Avenue, Pudong New Area, Shanghai 200120\n"
    "Alice Wong\n"
    "Global Solutions Ltd\n"
    "alice@global.io"
)

CHINESE_CARD = "张伟\n上海科技有限公司\n上海市浦东新区\n手机: 13800138000\n邮箱: zhangwei@shkj.cn"

NOISY_CARD = (
    "  \n"
    "Maria Garcia   \n"
    "Northwind Industries Inc.\n"
    "Austin, Texas\n"
    "Tel (512) 555-0188 | Fax 1234 5678 9012 3456\n"
    "MARIA.GARCIA@NORTHWIND.COM.\n"
    "northwind.net/contact,\n"
)

SAMPLE_CARDS = [
    ACME_CARD,
    ADDRESS_FIRST_CARD,
    CHINESE_CARD,
    NOISY_CARD,
    "12345\n67890",
    "visit us at ,,,acme",
    "bob@localhost",
    "",
    "   \n\t\n",
    "Bob Lee\nYe City\nhttp://acme.com:99999\nKowloon District, Hong Kong",
]


@pytest.fixture
def acme_card() -> str:
    return ACME_CARD


@pytest.fixture
def address_first_card() -> str:
    return ADDRESS_FIRST_CARD


@pytest.fixture
def chinese_card() -> str:
    return CHINESE_CARD


@pytest.fixture
def noisy_card() -> str:
    return NOISY_CARD


@pytest.fixture(params=SAMPLE_CARDS, ids=[f"card_{i}" for i in range(len(SAMPLE_CARDS))])
def sample_card(request) -> str:
    return request.param
