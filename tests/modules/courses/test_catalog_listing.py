"""Tests for catalog filtering, search, sorting and pagination."""

from datetime import datetime

import pytest

from app.modules.courses.repository import CourseSort
from app.modules.courses.service import CourseService, parse_positive_int


class TestPaginationParsing:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("3", 3),
            (" 2 ", 2),
            (4, 4),
            ("0", 1),
            ("-2", 1),
            ("abc", 1),
            ("", 1),
            (None, 1),
        ],
    )
    def test_page_values(self, raw, expected):
        assert parse_positive_int(raw, 1) == expected

    def test_limit_defaults_to_six(self):
        assert parse_positive_int("0", 6) == 6
        assert parse_positive_int(None, 6) == 6
        assert parse_positive_int("10", 6) == 10


class TestSortResolution:

    def test_known_keys(self):
        assert CourseSort.resolve("price-asc") is CourseSort.price_asc
        assert CourseSort.resolve("price-desc") is CourseSort.price_desc

    @pytest.mark.parametrize("raw", [None, "", "title", "PRICE-ASC"])
    def test_unknown_keys_sort_newest_first(self, raw):
        assert CourseSort.resolve(raw) is CourseSort.newest


class TestCatalogPagination:
    """13 matching courses split into pages of 6."""

    @pytest.fixture
    def thirteen_courses(self, make_course):
        return [make_course(title=f"Course {i:02d}") for i in range(13)]

    def test_first_page(self, db, thirteen_courses):
        page = CourseService(db).list_courses({"page": "1", "limit": "6"})

        assert len(page.courses) == 6
        assert page.total_courses == 13
        assert page.total_pages == 3
        assert page.current_page == 1

    def test_last_page(self, db, thirteen_courses):
        page = CourseService(db).list_courses({"page": "3", "limit": "6"})

        assert len(page.courses) == 1
        assert page.total_pages == 3
        assert page.current_page == 3

    def test_pages_do_not_overlap(self, db, thirteen_courses):
        service = CourseService(db)

        seen = []
        for number in ("1", "2", "3"):
            seen.extend(c.id for c in service.list_courses({"page": number}).courses)

        assert len(seen) == 13
        assert len(set(seen)) == 13

    @pytest.mark.parametrize("raw_page", ["0", "abc", None])
    def test_invalid_page_resolves_to_first(self, db, thirteen_courses, raw_page):
        page = CourseService(db).list_courses({"page": raw_page, "limit": "6"})

        assert page.current_page == 1
        assert len(page.courses) == 6

    @pytest.mark.parametrize("raw_limit", ["0", None, "-1", "many"])
    def test_invalid_limit_resolves_to_six(self, db, thirteen_courses, raw_limit):
        page = CourseService(db).list_courses({"limit": raw_limit})

        assert len(page.courses) == 6
        assert page.total_pages == 3

    def test_page_past_the_end_is_empty(self, db, thirteen_courses):
        page = CourseService(db).list_courses({"page": "9"})

        assert page.courses == []
        assert page.current_page == 9
        assert page.total_courses == 13

    def test_empty_catalog(self, db):
        page = CourseService(db).list_courses({})

        assert page.courses == []
        assert page.total_courses == 0
        assert page.total_pages == 0
        assert page.current_page == 1


class TestCatalogFilters:

    def test_deleted_courses_excluded(self, db, basic_course, deleted_course):
        page = CourseService(db).list_courses({})

        assert [c.id for c in page.courses] == [basic_course.id]
        assert page.total_courses == 1

    def test_search_matches_title_or_description(self, db, make_course):
        by_title = make_course(title="INTRO to Rust", description="Systems")
        by_description = make_course(title="Go", description="An introduction to Go")
        make_course(title="Advanced Rust", description="Lifetimes")
        make_course(title="Intro to Deleted", is_deleted=True)

        page = CourseService(db).list_courses({"searchTerm": "intro"})

        assert {c.id for c in page.courses} == {by_title.id, by_description.id}
        assert page.total_courses == 2

    def test_search_treats_wildcards_literally(self, db, make_course):
        literal = make_course(title="100% Python")
        make_course(title="1000 Python exercises")

        page = CourseService(db).list_courses({"searchTerm": "100%"})

        assert [c.id for c in page.courses] == [literal.id]

    def test_category_substring_case_insensitive(
        self, db, make_course, web_category, data_category
    ):
        web = make_course(title="React", category_id=web_category.id)
        make_course(title="Pandas", category_id=data_category.id)
        make_course(title="Uncategorised")

        page = CourseService(db).list_courses({"category": "WEB dev"})

        assert [c.id for c in page.courses] == [web.id]

    def test_category_and_search_combine(self, db, make_course, web_category, data_category):
        target = make_course(title="Intro to Vue", category_id=web_category.id)
        make_course(title="Intro to NumPy", category_id=data_category.id)
        make_course(title="Advanced Vue", category_id=web_category.id)

        page = CourseService(db).list_courses({"category": "web", "searchTerm": "intro"})

        assert [c.id for c in page.courses] == [target.id]
        assert page.total_courses == 1

    def test_list_items_carry_counts_without_enrollment_flag(
        self, db, basic_course, student_user, add_lesson, enroll
    ):
        add_lesson(basic_course)
        enroll(student_user, basic_course)

        item = CourseService(db).list_courses({}).courses[0]

        assert item.lessons_count == 1
        assert item.enrollments_count == 1
        assert "is_enrolled" not in item.model_dump()
        assert item.category.name == "Web Development"


class TestCatalogSorting:

    def test_price_desc(self, db, dated_courses):
        page = CourseService(db).list_courses({"sort": "price-desc"})

        assert [c.price for c in page.courses] == [30.0, 20.0, 10.0]

    def test_price_asc(self, db, dated_courses):
        page = CourseService(db).list_courses({"sort": "price-asc"})

        assert [c.price for c in page.courses] == [10.0, 20.0, 30.0]

    @pytest.mark.parametrize("sort", [None, "newest", "popular"])
    def test_default_is_newest_first(self, db, dated_courses, sort):
        page = CourseService(db).list_courses({"sort": sort})

        assert [c.id for c in page.courses] == [c.id for c in reversed(dated_courses)]

    @pytest.mark.parametrize("sort", ["price-asc", "price-desc", "newest"])
    def test_ties_are_broken_by_id(self, db, make_course, sort):
        created = datetime(2026, 3, 1, 9, 0, 0)
        courses = [make_course(price=25.0, created_at=created) for _ in range(7)]
        service = CourseService(db)

        seen = []
        for number in ("1", "2"):
            seen.extend(c.id for c in service.list_courses({"sort": sort, "page": number}).courses)

        assert seen == sorted(c.id for c in courses)
