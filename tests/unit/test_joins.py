"""Unit tests for the join operators."""

from __future__ import annotations

import pytest

from relalg import (
    NULL,
    Table,
    cross_join,
    full_outer_join,
    inner_join,
    left_outer_join,
    right_outer_join,
)
from relalg.domain.entities import JoinedRow, joined_row_type
from sample_rows import Author, Book


def by_author(book: Book, author: Author) -> bool:
    return book.author_id == author.id


def pairs(table: Table[JoinedRow]) -> list[tuple[int | None, int | None]]:
    """(left id, right id) per joined row, None for a padded side."""
    return [
        (
            row.left.id if row.left is not None else None,
            row.right.id if row.right is not None else None,
        )
        for row in table.rows()
    ]


@pytest.fixture
def empty_authors() -> Table[Author]:
    return Table("authors", Author)


@pytest.fixture
def empty_books() -> Table[Book]:
    return Table("books", Book)


@pytest.fixture
def library() -> tuple[Table[Book], Table[Author]]:
    """Books with an orphan (author 9) and authors with one who wrote nothing."""
    books = Table("books", Book)
    books.insert_many(
        [
            Book(1, "1984", 1),
            Book(2, "Animal Farm", 1),
            Book(3, "Orphan", 9),
            Book(4, "Mockingbird", 2),
        ]
    )
    authors = Table("authors", Author)
    authors.insert_many([Author(1, "Orwell"), Author(2, "Lee"), Author(3, "Huxley")])
    return books, authors


@pytest.mark.unit
class TestJoinedRow:
    """Tests for the joined row type."""

    def test_header_concatenates(self) -> None:
        row_type = joined_row_type(Book, Author)
        assert row_type.header() == ("id", "name", "author_id", "id", "name")

    def test_row_type_is_cached(self) -> None:
        assert joined_row_type(Book, Author) is joined_row_type(Book, Author)

    def test_values_and_display(self) -> None:
        row = joined_row_type(Book, Author)(Book(1, "1984", 1), Author(1, "Orwell"))

        assert row.values() == (1, "1984", 1, 1, "Orwell")
        assert row.to_display_row() == ("1", "1984", "1", "1", "Orwell")

    def test_padded_side_is_null(self) -> None:
        row = joined_row_type(Book, Author)(Book(1, "1984", 1), None)

        assert row.values() == (1, "1984", 1, NULL, NULL)
        assert row.to_display_row() == ("1", "1984", "1", "NULL", "NULL")

    def test_immutable(self) -> None:
        row = joined_row_type(Book, Author)(Book(1, "1984", 1), Author(1, "Orwell"))
        with pytest.raises(AttributeError):
            row.left = Book(2, "x", 2)  # type: ignore[misc]

    def test_needs_a_side(self) -> None:
        with pytest.raises(ValueError):
            joined_row_type(Book, Author)(None, None)

    def test_unbound_has_no_header(self) -> None:
        with pytest.raises(TypeError):
            JoinedRow.header()


@pytest.mark.unit
class TestCrossJoin:
    """Tests for cross_join."""

    def test_books_authors(self, books: Table[Book], authors: Table[Author]) -> None:
        """Right varies fastest."""
        result = cross_join(books, authors)

        assert len(result) == 4
        assert pairs(result) == [(1, 1), (1, 2), (2, 1), (2, 2)]

        first = result.rows()[0]
        assert first.left == Book(1, "1984", 1)
        assert first.right == Author(1, "Orwell")

    def test_result_table(self, books: Table[Book], authors: Table[Author]) -> None:
        result = cross_join(books, authors)

        assert result.name == "books_cross_authors"
        assert result.header() == ("id", "name", "author_id", "id", "name")

    def test_size_is_product(self, library: tuple[Table[Book], Table[Author]]) -> None:
        books, authors = library
        assert len(cross_join(books, authors)) == len(books) * len(authors)

    def test_empty_side(
        self,
        books: Table[Book],
        authors: Table[Author],
        empty_books: Table[Book],
        empty_authors: Table[Author],
    ) -> None:
        assert cross_join(books, empty_authors).rows() == ()
        assert cross_join(empty_books, authors).rows() == ()

    def test_inputs_untouched(self, books: Table[Book], authors: Table[Author]) -> None:
        before = (books.rows(), authors.rows())
        cross_join(books, authors)
        assert (books.rows(), authors.rows()) == before


@pytest.mark.unit
class TestInnerJoin:
    """Tests for inner_join."""

    def test_books_authors(self, books: Table[Book], authors: Table[Author]) -> None:
        result = inner_join(books, authors, by_author)

        assert pairs(result) == [(1, 1), (2, 2)]
        assert result.rows()[1].right.name == "Lee"

    def test_is_filtered_cross_join(
        self, library: tuple[Table[Book], Table[Author]]
    ) -> None:
        books, authors = library
        expected = [
            row for row in cross_join(books, authors).rows() if by_author(row.left, row.right)
        ]
        assert list(inner_join(books, authors, by_author).rows()) == expected

    def test_unmatched_rows_dropped(
        self, library: tuple[Table[Book], Table[Author]]
    ) -> None:
        books, authors = library
        result = inner_join(books, authors, by_author)

        assert pairs(result) == [(1, 1), (2, 1), (4, 2)]

    def test_no_match(self, books: Table[Book], authors: Table[Author]) -> None:
        assert len(inner_join(books, authors, lambda b, a: False)) == 0

    def test_empty_side(
        self, books: Table[Book], empty_authors: Table[Author]
    ) -> None:
        assert len(inner_join(books, empty_authors, by_author)) == 0


@pytest.mark.unit
class TestLeftOuterJoin:
    """Tests for left_outer_join."""

    def test_unmatched_left_padded_once(
        self, library: tuple[Table[Book], Table[Author]]
    ) -> None:
        books, authors = library
        result = left_outer_join(books, authors, by_author)

        assert pairs(result) == [(1, 1), (2, 1), (3, None), (4, 2)]
        orphan = result.rows()[2]
        assert orphan.values()[-2:] == (NULL, NULL)

    def test_every_left_row_present(
        self, library: tuple[Table[Book], Table[Author]]
    ) -> None:
        books, authors = library
        result = left_outer_join(books, authors, by_author)

        assert {row.left for row in result.rows()} == set(books.rows())

    def test_multiple_matches(self, books: Table[Book]) -> None:
        authors = Table("authors", Author)
        authors.insert_many([Author(1, "Orwell"), Author(1, "Blair")])

        result = left_outer_join(books, authors, by_author)

        assert [r.right.name if r.right else None for r in result.rows()] == [
            "Orwell",
            "Blair",
            None,
        ]

    def test_empty_right(
        self, books: Table[Book], empty_authors: Table[Author]
    ) -> None:
        result = left_outer_join(books, empty_authors, by_author)
        assert pairs(result) == [(1, None), (2, None)]

    def test_empty_left(
        self, empty_books: Table[Book], authors: Table[Author]
    ) -> None:
        assert len(left_outer_join(empty_books, authors, by_author)) == 0


@pytest.mark.unit
class TestRightOuterJoin:
    """Tests for right_outer_join."""

    def test_follows_right_order(
        self, library: tuple[Table[Book], Table[Author]]
    ) -> None:
        books, authors = library
        result = right_outer_join(books, authors, by_author)

        assert pairs(result) == [(1, 1), (2, 1), (4, 2), (None, 3)]

    def test_header_stays_left_then_right(
        self, books: Table[Book], authors: Table[Author]
    ) -> None:
        result = right_outer_join(books, authors, by_author)
        assert result.header() == ("id", "name", "author_id", "id", "name")

    def test_padded_left_is_null(
        self, library: tuple[Table[Book], Table[Author]]
    ) -> None:
        books, authors = library
        padded = right_outer_join(books, authors, by_author).rows()[-1]

        assert padded.left is None
        assert padded.values() == (NULL, NULL, NULL, 3, "Huxley")

    def test_empty_left(
        self, empty_books: Table[Book], authors: Table[Author]
    ) -> None:
        result = right_outer_join(empty_books, authors, by_author)
        assert pairs(result) == [(None, 1), (None, 2)]


@pytest.mark.unit
class TestFullOuterJoin:
    """Tests for full_outer_join."""

    def test_both_sides_preserved(
        self, library: tuple[Table[Book], Table[Author]]
    ) -> None:
        books, authors = library
        result = full_outer_join(books, authors, by_author)

        assert pairs(result) == [(1, 1), (2, 1), (3, None), (4, 2), (None, 3)]

    def test_matched_pairs_once(
        self, books: Table[Book], authors: Table[Author]
    ) -> None:
        result = full_outer_join(books, authors, by_author)
        assert pairs(result) == [(1, 1), (2, 2)]

    def test_empty_sides(
        self,
        books: Table[Book],
        authors: Table[Author],
        empty_books: Table[Book],
        empty_authors: Table[Author],
    ) -> None:
        assert pairs(full_outer_join(books, empty_authors, by_author)) == [
            (1, None),
            (2, None),
        ]
        assert pairs(full_outer_join(empty_books, authors, by_author)) == [
            (None, 1),
            (None, 2),
        ]
        assert len(full_outer_join(empty_books, empty_authors, by_author)) == 0
