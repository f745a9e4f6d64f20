import sqlite3

from flask import current_app, g


def connect(path):
    db = sqlite3.connect(path)
    db.row_factory = sqlite3.Row
    db.execute("PRAGMA foreign_keys = ON")
    return db


def get_db():
    if "db" not in g:
        g.db = connect(current_app.config["DATABASE"])
    return g.db


def close_db(e=None):
    db = g.pop("db", None)
    if db is not None:
        db.close()


def query_db(query, args=(), one=False):
    cur = get_db().execute(query, args)
    rv = cur.fetchall()
    cur.close()
    return (rv[0] if rv else None) if one else rv


def placeholders(values):
    """Return "?, ?, ?" for an IN clause over ``values``."""
    return ", ".join("?" for _ in values)


def upsert_translation(db, table, owner_column, owner_id, locale, fields):
    """Insert or replace the ``locale`` row of a translation table.

    Translation tables are unique on ``(owner_column, locale)``.
    """
    columns = [owner_column, "locale"] + list(fields)
    updates = ", ".join(f"{name} = excluded.{name}" for name in fields)
    db.execute(
        f"INSERT INTO {table} ({', '.join(columns)}) "
        f"VALUES ({placeholders(columns)}) "
        f"ON CONFLICT({owner_column}, locale) DO UPDATE SET {updates}",
        [owner_id, locale] + list(fields.values()),
    )


def init_app(app):
    app.teardown_appcontext(close_db)
