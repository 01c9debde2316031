"""Pagination — offset arithmetic, clamping and page counts."""

from zakat_ledger.core.pagination import (
    DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PageRequest, total_pages,
)


def test_defaults():
    page = PageRequest.from_params()
    assert (page.page, page.per_page, page.offset) == (1, DEFAULT_PAGE_SIZE, 0)


def test_offset_for_third_page():
    assert PageRequest.from_params(3, 10).offset == 20


def test_out_of_range_values_are_clamped():
    page = PageRequest.from_params(-2, 5000)
    assert page.page == 1
    assert page.per_page == MAX_PAGE_SIZE
    assert PageRequest.from_params(1, 0).per_page == DEFAULT_PAGE_SIZE


def test_total_pages():
    assert total_pages(25, 10) == 3
    assert total_pages(30, 10) == 3
    assert total_pages(0, 10) == 0
    assert total_pages(1, 100) == 1


def test_meta_shape():
    assert PageRequest(page=4, per_page=10).meta(25) == {
        "page": 4, "per_page": 10, "total": 25, "total_pages": 3,
    }
