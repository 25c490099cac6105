import threading
import time

from fapiao_lines.batch import extract_batch, extract_one, items_from_paths
from fapiao_lines.extractor import InvoiceExtractor
from fapiao_lines.invoice_number import LABEL_MISSING
from fapiao_lines.pdf_source import FragmentSourceError


def test_batch_preserves_input_order_and_isolates_failures(invoice_page, continuation_page):
    pages_by_name = {
        "slow.pdf": [invoice_page],
        "fast.pdf": [invoice_page, continuation_page],
    }

    def loader(data):
        if data == "broken.pdf":
            raise FragmentSourceError("Unable to read PDF text: bad xref")
        if data == "slow.pdf":
            time.sleep(0.05)
        return pages_by_name[data]

    items = [(name, name) for name in ("slow.pdf", "broken.pdf", "fast.pdf")]
    results = extract_batch(items, InvoiceExtractor(), max_workers=3, loader=loader)

    assert [r.source for r in results] == ["slow.pdf", "broken.pdf", "fast.pdf"]
    assert [len(r.line_items) for r in results] == [1, 0, 2]
    assert results[1].ok is False
    assert results[1].invoice_number == LABEL_MISSING
    assert "bad xref" in results[1].error
    assert results[0].ok and results[2].ok


def test_concurrent_documents_keep_separate_geometry(invoice_page, frag):
    # The second document has its header 100 units further right.
    shifted = [
        frag(f.text, f.x_start + 100.0, f.width, f.y_baseline, f.height) for f in invoice_page
    ]
    barrier = threading.Barrier(2)

    def loader(data):
        barrier.wait(timeout=5)
        return [data]

    results = extract_batch(
        [("a.pdf", invoice_page), ("b.pdf", shifted)], InvoiceExtractor(), max_workers=2, loader=loader
    )

    assert [r.line_items[0].get("数量") for r in results] == ["2", "2"]
    assert [r.line_items[0].get("单价") for r in results] == ["10.00", "10.00"]


def test_extract_one_wraps_source_errors():
    def loader(_data):
        raise FragmentSourceError("no pages")

    result = extract_one("x.pdf", b"", InvoiceExtractor(), loader)

    assert result.error == "no pages"
    assert result.line_items == []


def test_empty_batch():
    assert extract_batch([]) == []


def test_items_from_paths(tmp_path):
    path = tmp_path / "inv.pdf"

    assert items_from_paths([path]) == [("inv.pdf", path)]
