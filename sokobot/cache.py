import os
import sqlite3
from datetime import datetime, timedelta

DB_PATH = os.environ.get(
    "SOKOBOT_CACHE_DB",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "cache.db"),
)
TTL = timedelta(days=7)


def _get_conn() -> sqlite3.Connection:
    """Open a connection to the cache database, creating the table if needed."""
    conn = sqlite3.connect(DB_PATH)
    conn.execute("""
        CREATE TABLE IF NOT EXISTS solution_cache (
            level TEXT NOT NULL,
            options TEXT NOT NULL,
            moves TEXT NOT NULL,
            outcome TEXT NOT NULL,
            pushes INTEGER NOT NULL,
            states_explored INTEGER NOT NULL,
            cached_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (level, options)
        )
    """)
    return conn


def get_cached_solution(level: str, options: str) -> dict | None:
    """Look up a stored result. Returns None on miss or expiry."""
    conn = _get_conn()
    try:
        row = conn.execute(
            "SELECT moves, outcome, pushes, states_explored, cached_at "
            "FROM solution_cache WHERE level = ? AND options = ?",
            (level, options)
        ).fetchone()
        if row is None:
            return None
        cached_at = datetime.fromisoformat(row[4])
        if datetime.now() - cached_at > TTL:
            conn.execute(
                "DELETE FROM solution_cache WHERE level = ? AND options = ?",
                (level, options)
            )
            conn.commit()
            return None
        return {
            "moves": row[0],
            "outcome": row[1],
            "pushes": row[2],
            "states_explored": row[3],
        }
    finally:
        conn.close()


def set_cached_solution(level: str, options: str, moves: str, outcome: str,
                        pushes: int, states_explored: int) -> None:
    """Store a final result for a level under the given solver options."""
    conn = _get_conn()
    try:
        conn.execute(
            "INSERT OR REPLACE INTO solution_cache "
            "(level, options, moves, outcome, pushes, states_explored, cached_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            (level, options, moves, outcome, pushes, states_explored,
             datetime.now().isoformat())
        )
        conn.commit()
    finally:
        conn.close()


def clear_cache() -> None:
    """Delete all cached solutions."""
    conn = _get_conn()
    try:
        conn.execute("DELETE FROM solution_cache")
        conn.commit()
    finally:
        conn.close()
