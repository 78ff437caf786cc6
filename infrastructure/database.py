import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

from domain.entities import Task
from domain.errors import StoreError

logger = logging.getLogger(__name__)

TASK_COLUMNS = "id, title, description, status, creation_date"
TASK_SEQUENCE = "tasks"

# sqlite INTEGER is a signed 64-bit value
SQLITE_MIN_INT = -(2 ** 63)
SQLITE_MAX_INT = 2 ** 63 - 1


def _storable_id(task_id: int) -> bool:
    return SQLITE_MIN_INT <= task_id <= SQLITE_MAX_INT


class Database:
    def __init__(self, db_name: str = "tasks.db", timeout: float = 5.0):
        self.db_name = db_name
        self.timeout = timeout
        self._init_db()

    @contextmanager
    def _connect(self, immediate: bool = False) -> Iterator[sqlite3.Connection]:
        """Open a connection that commits on success, rolls back on error and always closes.

        ``immediate`` takes the write lock up front so that reads made inside
        the transaction cannot go stale before the write lands.
        """
        conn = None
        try:
            conn = sqlite3.connect(self.db_name, timeout=self.timeout)
            with conn:
                if immediate:
                    conn.execute("BEGIN IMMEDIATE")
                yield conn
        except sqlite3.Error as e:
            logger.error(f"Database operation failed on {self.db_name}: {e}")
            raise StoreError(str(e)) from e
        finally:
            if conn is not None:
                conn.close()

    def _init_db(self):
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL,
                    status INTEGER NOT NULL DEFAULT 0,
                    creation_date TEXT NOT NULL
                )
            """)
            # One row per named sequence; ids are drawn from here, never from the tasks table
            conn.execute("""
                CREATE TABLE IF NOT EXISTS counters (
                    name TEXT PRIMARY KEY,
                    seq INTEGER NOT NULL
                )
            """)
            conn.execute("INSERT OR IGNORE INTO counters (name, seq) VALUES (?, 0)", (TASK_SEQUENCE,))

    @staticmethod
    def _row_to_task(row) -> Task:
        return Task(
            id=row[0],
            title=row[1],
            description=row[2],
            status=bool(row[3]),
            creation_date=datetime.fromisoformat(row[4])
        )

    @staticmethod
    def _increment(conn: sqlite3.Connection, name: str) -> int:
        cursor = conn.execute("UPDATE counters SET seq = seq + 1 WHERE name = ?", (name,))
        if cursor.rowcount == 0:
            conn.execute("INSERT INTO counters (name, seq) VALUES (?, 1)", (name,))
            return 1
        return conn.execute("SELECT seq FROM counters WHERE name = ?", (name,)).fetchone()[0]

    def next_sequence(self, name: str = TASK_SEQUENCE) -> int:
        """Atomically increment the named counter and return its new value."""
        with self._connect(immediate=True) as conn:
            return self._increment(conn, name)

    def create_task(self, task: Task) -> Task:
        task.validate()
        with self._connect(immediate=True) as conn:
            task.id = self._increment(conn, TASK_SEQUENCE)
            conn.execute(
                "INSERT INTO tasks (id, title, description, status, creation_date) VALUES (?, ?, ?, ?, ?)",
                (task.id, task.title, task.description, 1 if task.status else 0, task.creation_date.isoformat())
            )
        logger.debug(f"Inserted task {task.id}")
        return task

    def get_task_by_id(self, task_id: int) -> Optional[Task]:
        if not _storable_id(task_id):
            return None
        with self._connect() as conn:
            row = conn.execute(f"SELECT {TASK_COLUMNS} FROM tasks WHERE id = ?", (task_id,)).fetchone()
        return self._row_to_task(row) if row else None

    def get_all_tasks(self, status: Optional[bool] = None) -> List[Task]:
        with self._connect() as conn:
            if status is None:
                rows = conn.execute(f"SELECT {TASK_COLUMNS} FROM tasks ORDER BY id").fetchall()
            else:
                rows = conn.execute(
                    f"SELECT {TASK_COLUMNS} FROM tasks WHERE status = ? ORDER BY id",
                    (1 if status else 0,)
                ).fetchall()
        logger.debug(f"Fetched {len(rows)} tasks (status filter: {status})")
        return [self._row_to_task(row) for row in rows]

    def update_task(self, task_id: int, changes: Dict[str, Any]) -> Optional[Task]:
        """Merge ``changes`` onto the stored task and persist the validated result.

        Returns None when no task has ``task_id``. A ValidationError raised by
        the merge rolls the transaction back, leaving the row untouched.
        """
        if not _storable_id(task_id):
            return None
        with self._connect(immediate=True) as conn:
            row = conn.execute(f"SELECT {TASK_COLUMNS} FROM tasks WHERE id = ?", (task_id,)).fetchone()
            if row is None:
                return None
            updated_task = self._row_to_task(row).merged(changes)
            conn.execute(
                "UPDATE tasks SET title = ?, description = ?, status = ? WHERE id = ?",
                (updated_task.title, updated_task.description, 1 if updated_task.status else 0, task_id)
            )
        return updated_task

    def delete_task(self, task_id: int) -> bool:
        if not _storable_id(task_id):
            return False
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            return cursor.rowcount > 0
