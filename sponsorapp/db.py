"""
sponsorapp/db.py - PostgreSQL data service

This module provides:
- PostgresDataService: DataService adapter over a psycopg2 connection pool
- One pooled connection per request, cached on flask.g
- release(exception): return the connection at the end of the request
"""

import logging

import psycopg2
from psycopg2 import sql
from psycopg2.extras import RealDictCursor
from psycopg2.pool import SimpleConnectionPool
from flask import g
from flask_bcrypt import generate_password_hash, check_password_hash

from .backend import DataService, BackendError, TABLES

logger = logging.getLogger(__name__)


class PostgresDataService(DataService):

    def __init__(self, pool):
        self.pool = pool

    @classmethod
    def from_config(cls, config):
        """
        Create the connection pool once at app startup.
        Pool is reused for all requests.
        """
        pool = SimpleConnectionPool(
            minconn=config['DB_POOL_MIN'],
            maxconn=config['DB_POOL_MAX'],
            dbname=config['DB_NAME'],
            user=config['DB_USER'],
            password=config['DB_PASS'],
            host=config['DB_HOST'],
            port=config['DB_PORT'],
        )
        logger.info("PostgreSQL pool ready for %s@%s/%s",
                    config['DB_USER'], config['DB_HOST'], config['DB_NAME'])
        return cls(pool)

    # ---- connections ---------------------------------------------------

    def connection(self):
        """Connection for the current request, cached on g."""
        if 'db' not in g:
            g.db = self.pool.getconn()
        return g.db

    def release(self, exception=None):
        db = g.pop('db', None)
        if db is not None:
            self.pool.putconn(db)

    def _run(self, query, params=(), fetch=True):
        conn = self.connection()
        cur = conn.cursor(cursor_factory=RealDictCursor)
        try:
            cur.execute(query, params)
            rows = [dict(row) for row in cur.fetchall()] if fetch else []
            count = cur.rowcount
            conn.commit()
            return rows, count
        except psycopg2.Error as e:
            conn.rollback()
            logger.error("Query failed: %s", e)
            raise BackendError(str(e)) from e
        finally:
            cur.close()

    # ---- query building ------------------------------------------------

    @staticmethod
    def _table(table):
        if table not in TABLES:
            raise BackendError(f"Unknown table: {table}")
        return sql.Identifier(table)

    @staticmethod
    def _columns(columns):
        if columns == '*':
            return sql.SQL('*')
        names = [c.strip() for c in columns.split(',')]
        return sql.SQL(', ').join(sql.Identifier(c) for c in names)

    @staticmethod
    def _conditions(where=None, exclude=None, any_of=None):
        parts = []
        params = []

        for column, value in (where or {}).items():
            if isinstance(value, (list, tuple, set)):
                values = list(value)
                if not values:
                    parts.append(sql.SQL('FALSE'))
                    continue
                parts.append(sql.SQL('{} = ANY(%s)').format(sql.Identifier(column)))
                params.append(values)
            elif value is None:
                parts.append(sql.SQL('{} IS NULL').format(sql.Identifier(column)))
            else:
                parts.append(sql.SQL('{} = %s').format(sql.Identifier(column)))
                params.append(value)

        for column, value in (exclude or {}).items():
            parts.append(sql.SQL('{} <> %s').format(sql.Identifier(column)))
            params.append(value)

        if any_of:
            alternatives = []
            for column, value in any_of.items():
                alternatives.append(sql.SQL('{} = %s').format(sql.Identifier(column)))
                params.append(value)
            parts.append(sql.SQL('({})').format(sql.SQL(' OR ').join(alternatives)))

        if not parts:
            return sql.SQL(''), params
        return sql.SQL(' WHERE ') + sql.SQL(' AND ').join(parts), params

    # ---- rows ----------------------------------------------------------

    def select(self, table, columns='*', where=None, exclude=None,
               any_of=None, order_by=None, limit=None):
        clause, params = self._conditions(where, exclude, any_of)
        query = sql.SQL('SELECT {} FROM {}').format(self._columns(columns), self._table(table)) + clause

        if order_by:
            query += sql.SQL(' ORDER BY ') + sql.SQL(', ').join(
                sql.SQL('{} {}').format(sql.Identifier(column), sql.SQL('ASC' if ascending else 'DESC'))
                for column, ascending in order_by
            )
        if limit is not None:
            query += sql.SQL(' LIMIT %s')
            params.append(int(limit))

        rows, _ = self._run(query, params)
        return rows

    def insert(self, table, values):
        columns = list(values)
        query = sql.SQL('INSERT INTO {} ({}) VALUES ({}) ON CONFLICT DO NOTHING RETURNING *').format(
            self._table(table),
            sql.SQL(', ').join(sql.Identifier(c) for c in columns),
            sql.SQL(', ').join(sql.Placeholder() * len(columns)),
        )
        rows, _ = self._run(query, [values[c] for c in columns])
        return rows[0] if rows else None

    def update(self, table, values, where):
        assignments = sql.SQL(', ').join(
            sql.SQL('{} = %s').format(sql.Identifier(c)) for c in values
        )
        clause, params = self._conditions(where)
        query = sql.SQL('UPDATE {} SET {}').format(self._table(table), assignments) + clause
        _, count = self._run(query, list(values.values()) + params, fetch=False)
        return count

    def delete(self, table, where):
        clause, params = self._conditions(where)
        query = sql.SQL('DELETE FROM {}').format(self._table(table)) + clause
        _, count = self._run(query, params, fetch=False)
        return count

    # ---- identity ------------------------------------------------------

    def get_identity(self, user_id):
        rows, _ = self._run(
            "SELECT id, email, full_name FROM auth_users WHERE id = %s", (user_id,))
        return rows[0] if rows else None

    def sign_in(self, email, password):
        rows, _ = self._run(
            "SELECT id, email, full_name, password_hash FROM auth_users WHERE email = %s",
            (email.lower(),))
        if not rows or not check_password_hash(rows[0]['password_hash'], password):
            return None
        identity = rows[0]
        identity.pop('password_hash')
        return identity

    def sign_up(self, email, password, full_name):
        """
        Create the identity; the on_auth_user_created trigger adds the profile row.
        E-mails are stored lowercased, so the UNIQUE constraint is case-insensitive.
        """
        password_hash = generate_password_hash(password).decode('utf-8')
        rows, _ = self._run("""
            INSERT INTO auth_users (email, password_hash, full_name)
            VALUES (%s, %s, %s)
            ON CONFLICT (email) DO NOTHING
            RETURNING id, email, full_name
        """, (email.lower(), password_hash, full_name))
        return rows[0] if rows else None

    def update_identity_email(self, user_id, email):
        """Returns 0 when the user is gone or the address belongs to someone else."""
        email = email.lower()
        _, count = self._run("""
            UPDATE auth_users SET email = %s
            WHERE id = %s
              AND NOT EXISTS (SELECT 1 FROM auth_users WHERE email = %s AND id <> %s)
        """, (email, user_id, email, user_id), fetch=False)
        return count

    def delete_identity(self, user_id):
        _, count = self._run("DELETE FROM auth_users WHERE id = %s", (user_id,), fetch=False)
        return count
