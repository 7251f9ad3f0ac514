# relations and their schemas
relations = {
    "books": [
        ("id", "SERIAL"),
        ("title", "TEXT"),
        ("author", "TEXT"),
        ("PRIMARY KEY", "(id)"),
    ],
}

# how the books relation looks in information_schema.columns
# (column_name, data_type) in ordinal order
books_shape = [
    ("id", "integer"),
    ("title", "text"),
    ("author", "text"),
]

# initial rows, in insertion order: (title, author)
seed_books = [
    ("Hands-on Rust", "Wolverson, Herbert"),
    ("Rust Brain Teasers", "Wolverson, Herbert"),
]
