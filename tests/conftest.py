from typing import List

import pytest

from fapiao_lines.models import Fragment

# Header label positions (x_start, width); every label is one fragment.
HEADER_LAYOUT = [
    ("项目名称", 20.0, 40.0),
    ("规格型号", 100.0, 40.0),
    ("单位", 170.0, 20.0),
    ("数量", 210.0, 20.0),
    ("单价", 260.0, 20.0),
    ("金额", 320.0, 20.0),
    ("税率/征收率", 370.0, 50.0),
    ("税额", 450.0, 20.0),
]


def _frag(text: str, x: float, width: float, y: float, height: float = 9.0) -> Fragment:
    return Fragment(text=text, x_start=x, width=width, y_baseline=y, height=height)


def header_fragments(y: float) -> List[Fragment]:
    return [_frag(text, x, w, y) for text, x, w in HEADER_LAYOUT]


def widget_row(y: float, name: str = "*Widget*DescriptionText") -> List[Fragment]:
    return [
        _frag(name, 10.0, 60.0, y),
        _frag("个", 176.0, 8.0, y),
        _frag("2", 222.0, 6.0, y),
        _frag("10.00", 262.0, 16.0, y),
        _frag("20.00", 322.0, 16.0, y),
        _frag("13%", 388.0, 14.0, y),
        _frag("2.60", 454.0, 14.0, y),
    ]


@pytest.fixture()
def frag():
    return _frag


@pytest.fixture()
def invoice_page() -> List[Fragment]:
    """One-page invoice: number, header, one item wrapped over two rows, subtotal."""
    page = [_frag("发票号码：12345678901234567890", 300.0, 150.0, 260.0)]
    page += header_fragments(200.0)
    page += widget_row(180.0)
    page.append(_frag("Extra", 20.0, 30.0, 170.0))
    page += [
        _frag("小计", 30.0, 20.0, 150.0),
        _frag("¥20.00", 322.0, 30.0, 150.0),
        _frag("¥2.60", 450.0, 25.0, 150.0),
    ]
    return page


@pytest.fixture()
def continuation_page() -> List[Fragment]:
    """A second page without a header row; items start after row index 1 as on page one."""
    page = [
        _frag("销售方", 20.0, 30.0, 260.0),
        _frag("购买方", 20.0, 30.0, 230.0),
    ]
    page += widget_row(200.0, name="*Gadget*Thing")
    page += [
        _frag("合计", 30.0, 20.0, 170.0),
        _frag("¥40.00", 322.0, 30.0, 170.0),
    ]
    return page
