"""Integration tests running whole queries through a Database."""

from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from relalg import (
    NULL,
    AmbiguousColumnError,
    Database,
    TableAlreadyExistsError,
    avg_of,
    count,
    sum_of,
)
from sample_rows import Author, Book, Sale


def by_author(book: Book, author: Author) -> bool:
    return book.author_id == author.id


@pytest.fixture
def library(db: Database) -> Database:
    """A database holding books, authors and sales."""
    db.create_table("books", Book)
    db.create_table("authors", Author)
    db.create_table("sales", Sale)
    db.insert_into(
        "books",
        Book(1, "1984", 1),
        Book(2, "Mockingbird", 2),
        Book(3, "Brave New World", 3),
    )
    db.insert_into("authors", Author(1, "Orwell"), Author(2, "Lee"), Author(4, "Woolf"))
    db.insert_into(
        "sales",
        Sale(1, "north", 10),
        Sale(2, "south", 5),
        Sale(1, "south", 7),
        Sale(3, "north", None),
    )
    return db


@pytest.mark.integration
class TestLibraryQueries:
    """End-to-end queries over a small library."""

    def test_books_with_authors(self, library: Database) -> None:
        books = library.require_table("books", Book)
        authors = library.require_table("authors", Author)

        result = library.inner_join(books, authors, by_author)

        assert [(r.left.name, r.right.name) for r in result] == [
            ("1984", "Orwell"),
            ("Mockingbird", "Lee"),
        ]
        assert result.header() == ("id", "name", "author_id", "id", "name")

    def test_full_outer_join_keeps_everyone(self, library: Database) -> None:
        books = library.require_table("books")
        authors = library.require_table("authors")

        result = library.full_outer_join(books, authors, by_author)
        rows = result.rows()

        assert len(rows) == 4
        assert rows[2].values() == (3, "Brave New World", 3, NULL, NULL)
        assert rows[3].values() == (NULL, NULL, NULL, 4, "Woolf")
        assert rows[3].to_display_row() == ("NULL", "NULL", "NULL", "4", "Woolf")

    def test_project_join_result_by_position(self, library: Database) -> None:
        books = library.require_table("books")
        authors = library.require_table("authors")
        joined = library.inner_join(books, authors, by_author)

        titles = library.project(joined, [1, 4])

        assert titles.header() == ("name", "name")
        assert [row.values() for row in titles] == [("1984", "Orwell"), ("Mockingbird", "Lee")]

    def test_project_join_result_ambiguous_name(self, library: Database) -> None:
        joined = library.cross_join(
            library.require_table("books"), library.require_table("authors")
        )

        with pytest.raises(AmbiguousColumnError):
            library.project(joined, ["name"])

    def test_sales_per_book(self, library: Database) -> None:
        sales = library.require_table("sales", Sale)

        result = library.group_by(
            sales, "book_id", {"orders": count(), "copies": sum_of("copies")}
        )

        assert result.header() == ("book_id", "orders", "copies")
        assert [row.values() for row in result] == [(1, 2, 17), (2, 1, 5), (3, 1, 0)]

    def test_chained_query_adopted_and_reused(self, library: Database) -> None:
        sales = library.require_table("sales", Sale)
        north = library.select(sales, lambda s: s.region == "north")
        south = library.select(sales, lambda s: s.region == "south")

        everywhere = library.union(north, south)
        library.adopt_table(everywhere)

        assert "sales_select_union_sales_select" in library
        summary = library.aggregate(
            library.require_table("sales_select_union_sales_select"),
            {"orders": count(), "avg": avg_of("copies")},
        )
        assert [row.values() for row in summary] == [(4, 22 / 3)]

    def test_results_are_not_registered(self, library: Database) -> None:
        books = library.require_table("books")
        library.distinct(books)

        assert library.table_names() == ["authors", "books", "sales"]

    def test_name_conflict_leaves_original(self, library: Database) -> None:
        with pytest.raises(TableAlreadyExistsError):
            library.create_table("books", Author)

        assert library.require_table("books").row_type is Book
        assert len(library.require_table("books")) == 3

    def test_operator_metrics_recorded(
        self, library: Database, collector_registry: CollectorRegistry
    ) -> None:
        books = library.require_table("books")
        authors = library.require_table("authors")

        library.cross_join(books, authors)
        library.cross_join(books, authors)

        labels = {"operator": "cross_join"}
        assert collector_registry.get_sample_value("relalg_operator_calls_total", labels) == 2
        assert collector_registry.get_sample_value("relalg_operator_rows_out_total", labels) == 18
        assert collector_registry.get_sample_value("relalg_rows_inserted_total") == 10
