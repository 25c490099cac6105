from fapiao_lines.invoice_number import (
    LABEL_MISSING,
    NUMBER_MISSING,
    extract_invoice_number,
    find_invoice_number,
)
from fapiao_lines.models import Block


def _rows(*texts):
    return [[Block(text, 0.0, 10.0)] for text in texts]


def test_full_width_colon_label():
    rows = _rows("电子发票（普通发票）", "发票号码：12345678901234567890")

    assert extract_invoice_number(rows) == "12345678901234567890"


def test_half_width_colon_and_split_blocks():
    rows = [[Block("发票号码:", 0.0, 40.0), Block("24442000000123456789", 45.0, 120.0)]]

    assert extract_invoice_number(rows) == "24442000000123456789"


def test_label_without_number():
    rows = _rows("发票号码：", "12345678901234567890")

    assert extract_invoice_number(rows) == NUMBER_MISSING


def test_longer_digit_runs_are_not_invoice_numbers():
    rows = _rows("发票号码：123456789012345678901")

    assert extract_invoice_number(rows) == NUMBER_MISSING


def test_label_not_found():
    rows = _rows("开票日期：2024年01月01日", "12345678901234567890")

    assert extract_invoice_number(rows) == LABEL_MISSING
    assert find_invoice_number(rows) is None


def test_first_labelled_row_wins():
    rows = _rows("发票号码：", "发票号码：12345678901234567890")

    assert extract_invoice_number(rows) == NUMBER_MISSING
