import pytest

from storefront.domain import (
    AcademicFormat,
    AcademicResource,
    Course,
    CourseLevel,
    DigitalDownload,
    ProductType,
)
from storefront.products import (
    discount_percent,
    format_inr,
    parse_product,
    parse_products,
    product_to_dict,
)
from storefront.seed import SEED_PRODUCTS, seed_products


@pytest.fixture
def course_raw():
    return dict(SEED_PRODUCTS[0])


def test_parse_course(course_raw):
    """Valid course record builds a Course"""
    result = parse_product(course_raw)

    assert result.is_right
    course = result.value
    assert isinstance(course, Course)
    assert course.type is ProductType.COURSE
    assert course.level is CourseLevel.INTERMEDIATE
    assert course.tags == ("Web Dev", "React", "NodeJS")
    assert course.original_price == 12999


def test_parse_each_variant():
    products = parse_products(SEED_PRODUCTS).value

    assert isinstance(products[2], DigitalDownload)
    assert products[2].file_format == "XLSX"
    assert isinstance(products[3], AcademicResource)
    assert products[3].format is AcademicFormat.PDF


def test_unknown_type_fails(course_raw):
    result = parse_product({**course_raw, "type": "ebook"})

    assert result.is_left
    assert "Unknown product type" in result.value["error"]


def test_course_without_lectures_fails(course_raw):
    del course_raw["lectures"]
    result = parse_product(course_raw)

    assert result.is_left
    assert "lectures" in result.value["error"]


@pytest.mark.parametrize("price", [-1, 10.5, "3499", True, None])
def test_price_must_be_non_negative_int(course_raw, price):
    assert parse_product({**course_raw, "price": price}).is_left


@pytest.mark.parametrize("rating", [-0.1, 5.01, "4.5"])
def test_rating_bounds(course_raw, rating):
    assert parse_product({**course_raw, "rating": rating}).is_left


def test_rating_edges_accepted(course_raw):
    assert parse_product({**course_raw, "rating": 0}).is_right
    assert parse_product({**course_raw, "rating": 5.0}).is_right


def test_foreign_variant_fields_rejected(course_raw):
    """A course carrying download fields must not pass"""
    result = parse_product({**course_raw, "fileFormat": "PDF"})

    assert result.is_left
    assert "fileFormat" in result.value["error"]


def test_level_out_of_range(course_raw):
    assert parse_product({**course_raw, "level": "Expert"}).is_left


def test_parse_products_stops_on_first_invalid():
    raws = list(SEED_PRODUCTS) + [{"type": "course"}]
    assert parse_products(raws).is_left


def test_product_to_dict_round_trip():
    for raw, product in zip(SEED_PRODUCTS, seed_products()):
        assert product_to_dict(product) == raw


def test_discount_percent():
    course, _, download, _ = seed_products()

    assert discount_percent(course) == 73
    assert discount_percent(download) == 50


def test_format_inr():
    assert format_inr(199) == "₹199"
    assert format_inr(3499) == "₹3,499"
    assert format_inr(123456) == "₹1,23,456"
    assert format_inr(12345678) == "₹1,23,45,678"
