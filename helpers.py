from collections import namedtuple
from contextlib import contextmanager

import psycopg
from psycopg import sql
from psycopg.rows import class_row

import info
import tables
from errors import BookNotFound, StorageUnavailable

# one row of the books relation
Book = namedtuple("Book", ["id", "title", "author"])

# id is a SERIAL, i.e. a 4-byte integer
MAX_ID = 2**31 - 1


def check_id(book_id):
    # ids outside the column range cannot belong to any book
    if not 1 <= book_id <= MAX_ID:
        raise BookNotFound(book_id)


@contextmanager
def storage_errors(action):
    """
    Turns psycopg's connection and I/O failures into StorageUnavailable
    action: str: what we were doing, goes into the error message
    """

    try:
        yield
    except psycopg.OperationalError as e:
        raise StorageUnavailable(f"Could not {action}: {e}") from e


def connect(database=None, autocommit=True, verbose=False):
    """
    Opens a connection to the database described in `info`
    database: str: database name, by default `info.dbname`
    Returns: psycopg connection; use it as a context manager
    """

    database = database or info.dbname
    with storage_errors(f"connect to database {database}"):
        connection = psycopg.connect(info.conninfo(database), autocommit=autocommit)
    if verbose:
        print(f"Connection with database {database} established")

    return connection


def create_db_if_not_exists(verbose=False):
    """
    Checks whether the catalog database exists and creates it if it does not.
      Connects to the maintenance database for that.
    Returns: bool: True if the database has been created
    """

    with connect(info.maintenance_dbname, verbose=verbose) as conn:
        with conn.cursor() as cur, storage_errors("create the database"):
            cur.execute(
                "SELECT EXISTS(SELECT 1 FROM pg_database WHERE datname = %s)",
                (info.dbname,),
            )
            if cur.fetchone()[0]:
                if verbose:
                    print(f"Database {info.dbname} already exists")
                return False

            # CREATE DATABASE cannot run inside a transaction block
            cur.execute(
                sql.SQL("CREATE DATABASE {}").format(sql.Identifier(info.dbname))
            )
    if verbose:
        print(f"Database {info.dbname} created")

    return True


def insert_into_table(relation, attributes, values, cursor):
    """
    Inserts data into attributes of the relation and returns
      the primary key, i.e. id.

    Parameters:
    - relation: str: name of the relation;
    - attributes: list or tuple of strings: list of the attributes' names
    - values: list or tuple: list of the corresponding to attributes values,
      None is stored as NULL
    - cursor: PostgeSQL cursor object

    Returns:
    - id of the the row, i.e. its primary key.
    """

    if len(attributes) != len(values):
        raise ValueError("Number of attributes and values is different")

    query = sql.SQL(
        """
        INSERT INTO {rel} ({cols}) VALUES ({vals})
        RETURNING id;
        """
    ).format(
        rel=sql.Identifier(relation),
        cols=sql.SQL(", ").join(map(sql.Identifier, attributes)),
        vals=sql.SQL(", ").join(sql.Placeholder() * len(values)),
    )
    cursor.execute(query, values)

    return cursor.fetchone()[0]


def bootstrap(relations, shape, seed, connection, verbose=False):
    """
    Creates the books relation and loads the seed rows, in one transaction.
      Runs at most once per store: when a relation with the right shape
      is already there nothing is created or inserted.

    Parameters:
    - relations: dict: relations' schemata, see `schemata.relations`
    - shape: list of (column_name, data_type) the relation must have
    - seed: list of (title, author) tuples, inserted in order
    - connection: psycopg connection

    Returns: list of ints: ids of the seeded rows, empty if nothing was seeded

    Raises SchemaConflict or StorageUnavailable; neither is retried.
    """

    ids = []
    with storage_errors("bootstrap the catalog"):
        with connection.transaction(), connection.cursor() as cur:
            if not tables.create_books_table(
                relations, shape, connection, cur, verbose
            ):
                return ids

            for title, author in seed:
                ids.append(
                    insert_into_table("books", ["title", "author"], [title, author], cur)
                )
                if verbose:
                    print(f'  {author} "{title}" loaded with id {ids[-1]}')

    return ids


def init_db(relations, shape, seed, verbose=False):
    """
    Connects to the catalog database and bootstraps it.
    Returns: an open psycopg connection, ready to use
    """

    connection = connect(verbose=verbose)
    try:
        bootstrap(relations, shape, seed, connection, verbose)
    except Exception:
        connection.close()
        raise

    return connection


def add_book(connection, title=None, author=None):
    """
    Adds a book; either field may be None.
    Returns: int: the id assigned to the new book
    """

    with storage_errors("add a book"), connection.cursor() as cur:
        return insert_into_table("books", ["title", "author"], [title, author], cur)


def all_books(connection):
    """
    Retrieves all books, in the order they were added
    Returns: list of Book
    """

    with storage_errors("read books"):
        with connection.cursor(row_factory=class_row(Book)) as cur:
            cur.execute("SELECT id, title, author FROM books ORDER BY id")
            return cur.fetchall()


def book_by_id(connection, book_id):
    check_id(book_id)
    with storage_errors(f"read book {book_id}"):
        with connection.cursor(row_factory=class_row(Book)) as cur:
            cur.execute(
                "SELECT id, title, author FROM books WHERE id = %s", (book_id,)
            )
            book = cur.fetchone()

    if book is None:
        raise BookNotFound(book_id)

    return book


def update_book(connection, book):
    """
    Updates title and author of the book; book.id picks the row
      and is never changed.
    """

    check_id(book.id)
    with storage_errors(f"update book {book.id}"), connection.cursor() as cur:
        cur.execute(
            "UPDATE books SET title = %s, author = %s WHERE id = %s",
            (book.title, book.author, book.id),
        )
        if cur.rowcount == 0:
            raise BookNotFound(book.id)

    return 0


def delete_book(connection, book_id):
    # the id sequence is not rewound, so the id is never handed out again
    check_id(book_id)
    with storage_errors(f"delete book {book_id}"), connection.cursor() as cur:
        cur.execute("DELETE FROM books WHERE id = %s", (book_id,))
        if cur.rowcount == 0:
            raise BookNotFound(book_id)

    return 0
