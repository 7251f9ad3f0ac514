import sys

import psycopg

import helpers
import schemata
import tables
from errors import CatalogError

# complete dictionary of relations' schemata
relations = schemata.relations

commands = ("init", "list", "show", "add", "update", "delete")


def main(argv=None):
    # describe steps
    verbose = False
    # start the books relation over
    clear_database = False
    no_warning = False

    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] not in commands:
        print_usage()
        return 1
    command, args = args[0], args[1:]

    if "-V" in args:
        verbose = True
        args.remove("-V")
    if "-C" in args:
        clear_database = True
        args.remove("-C")
    if "-NW" in args:
        no_warning = True
        args.remove("-NW")

    if clear_database and command != "init":
        print("Option -C only works with `init`")
        return 1

    try:
        if command == "init":
            if args:
                print_usage()
                return 1
            if clear_database and not no_warning:
                if warning_message():
                    return 1
            return init(clear_database, verbose)

        with helpers.connect(verbose=verbose) as conn:
            result = run_command(command, args, conn, verbose)

        if verbose:
            print("Connection closed")
        return result

    except (CatalogError, psycopg.Error) as e:
        print("Error:", e)
        return 1


def init(clear_database=False, verbose=False):
    """
    Creates the database if needed, drops the books relation if asked to,
      then creates the relation and loads the seed books.
    Returns: int: 0 on success
    """

    helpers.create_db_if_not_exists(verbose)

    if clear_database:
        with helpers.connect(verbose=verbose) as conn:
            with conn.cursor() as cur:
                tables.drop_books_table(conn, cur, verbose)

    with helpers.init_db(
        relations, schemata.books_shape, schemata.seed_books, verbose
    ) as conn:
        count = len(helpers.all_books(conn))

    print(f"Catalog ready, {count} books")

    return 0


def run_command(command, args, connection, verbose=False):
    # every command but `init` works on an existing catalog
    if command == "list":
        if args:
            print_usage()
            return 1
        books = helpers.all_books(connection)
        for book in books:
            print_book(book)
        if verbose:
            print(f"{len(books)} books")
        return 0

    if command == "add":
        if len(args) != 2:
            print_usage()
            return 1
        title, author = (arg or None for arg in args)
        book_id = helpers.add_book(connection, title, author)
        print(book_id)
        return 0

    try:
        book_id = int(args[0])
    except (IndexError, ValueError):
        print_usage()
        return 1

    if command == "show":
        if len(args) != 1:
            print_usage()
            return 1
        print_book(helpers.book_by_id(connection, book_id))

    elif command == "update":
        if len(args) != 3:
            print_usage()
            return 1
        title, author = (arg or None for arg in args[1:])
        helpers.update_book(connection, helpers.Book(book_id, title, author))
        if verbose:
            print(f"Book {book_id} updated")

    elif command == "delete":
        if len(args) != 1:
            print_usage()
            return 1
        helpers.delete_book(connection, book_id)
        if verbose:
            print(f"Book {book_id} deleted")

    return 0


def print_book(book):
    author = book.author if book.author is not None else "Unknown"
    title = book.title if book.title is not None else "Unknown"
    print(f'{book.id:>4}  {author} "{title}"')


def warning_message():
    warning = input(
        'You are about to drop the "books" relation with all its rows. Are you sure you want to continue? yes/no: '
    ).lower()

    if warning == "yes" or warning == "y":
        return 0
    elif warning == "no" or warning == "n":
        print("Nothing dropped")
        return 1
    else:
        print("Seems like you pressed the wrong button. Try again")
        return warning_message()


def print_usage():
    print("Usage: `python main.py command [arguments] [options]`")
    print("Available commands:")
    print("\tinit (create the database and the books relation, load seed books)")
    print("\tlist (print all books)")
    print("\tshow ID (print one book)")
    print("\tadd TITLE AUTHOR (add a book, print its id)")
    print("\tupdate ID TITLE AUTHOR (change title and author of a book)")
    print("\tdelete ID (delete a book)")
    print("Pass an empty string as TITLE or AUTHOR to leave it unset")
    print("Available options:")
    print("\t-C (drop the books relation first, `init` only)")
    print("\t-V (verbose on)")
    print("\t-NW (skip warning message)")


if __name__ == "__main__":
    sys.exit(main())
