from psycopg import sql

from errors import SchemaConflict


def get_table_columns(table, connection, cursor, verbose=False):
    """
    Reads the columns of the relation from information_schema
    Returns: list of (column_name, data_type, column_default) tuples
      in ordinal order; empty list if the relation does not exist
    """

    query = sql.SQL(
        """
        SELECT column_name, data_type, column_default
          FROM information_schema.columns
          WHERE table_schema = current_schema()
            AND table_name = {}
          ORDER BY ordinal_position;
        """
    ).format(sql.Literal(table))
    if verbose:
        print(query.as_string(connection))
    cursor.execute(query)

    return [tuple(row) for row in cursor.fetchall()]


def get_primary_key(table, connection, cursor, verbose=False):
    """
    Reads the primary key of the relation
    Returns: list of column names in key order; empty if there is no key
    """

    query = sql.SQL(
        """
        SELECT kcu.column_name
          FROM information_schema.table_constraints tc
          JOIN information_schema.key_column_usage kcu
            ON kcu.constraint_schema = tc.constraint_schema
           AND kcu.constraint_name = tc.constraint_name
          WHERE tc.constraint_type = 'PRIMARY KEY'
            AND tc.table_schema = current_schema()
            AND tc.table_name = {}
          ORDER BY kcu.ordinal_position;
        """
    ).format(sql.Literal(table))
    if verbose:
        print(query.as_string(connection))
    cursor.execute(query)

    return [row[0] for row in cursor.fetchall()]


def create_books_table(relations, shape, connection, cursor, verbose=False):
    """
    Creates the books relation unless it is already there.

    Parameters:
    - relations: dict: relations' schemata, see `schemata.relations`
    - shape: list of (column_name, data_type): what an existing
      relation must look like to be accepted
    - connection: psycopg class instance
    - cursor: psycopg class instance

    Returns: bool: True if the relation has been created,
      False if a relation with the same shape already existed

    Raises SchemaConflict if the relation exists with other columns,
      or its id is not generated from a sequence, or id is not
      its primary key.
    """

    table = "books"
    columns = relations[table]

    found = get_table_columns(table, connection, cursor, verbose)
    if found:
        found_shape = [(name, datatype) for name, datatype, _ in found]
        if found_shape != shape:
            raise SchemaConflict(table, found_shape)
        # id SERIAL means the default is nextval('<sequence>'::regclass)
        id_default = found[0][2] or ""
        if not id_default.startswith("nextval("):
            raise SchemaConflict(table, found_shape, "id has no sequence default")
        if get_primary_key(table, connection, cursor, verbose) != ["id"]:
            raise SchemaConflict(table, found_shape, "id is not the primary key")
        if verbose:
            print(f'Relation "{table}" already exists')
        return False

    query = sql.SQL(
        """
        CREATE TABLE {} (
          {id} SERIAL,
          {title} TEXT,
          {author} TEXT,
          PRIMARY KEY({id})
        );
        """
    ).format(
        sql.Identifier(table),
        id=sql.Identifier(columns[0][0]),
        title=sql.Identifier(columns[1][0]),
        author=sql.Identifier(columns[2][0]),
    )
    if verbose:
        print(query.as_string(connection))
    cursor.execute(query)

    return True


def drop_books_table(connection, cursor, verbose=False):
    # drop the books table and its id sequence
    query = sql.SQL(
        """
        DROP TABLE IF EXISTS {} CASCADE;
        """
    ).format(sql.Identifier("books"))
    if verbose:
        print(query.as_string(connection))
    cursor.execute(query)
    if verbose:
        print('Relation "books" has been dropped')

    return 0
