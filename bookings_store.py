"""Bookings store with a SQLite backend.

Documents live in the `bookings` table and are handed out as dicts using the
same field names the webhook sees:
- id, cabinId, userId, date, time, status, createdAt, updatedAt, meta

Public methods on BookingsStore:
- add(doc) -> str
- get(booking_id) -> dict | None
- find(**equals) -> list of dicts, in insertion order
- update(booking_id, fields) -> dict | None
- reset()

Any sqlite3 failure surfaces as StoreError.
"""
import json
import sqlite3
from typing import Dict, List, Optional, Tuple
from uuid import uuid4

from errors import StoreError

# document field -> column
COLUMNS = {
    "id": "id",
    "cabinId": "cabin_id",
    "userId": "user_id",
    "date": "date",
    "time": "time",
    "status": "status",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "meta": "meta",
}


def generate_booking_id() -> str:
    return f"bkg_{uuid4().hex}"


def _row_to_doc(r) -> Dict:
    meta = {}
    try:
        meta = json.loads(r["meta"]) if r["meta"] else {}
    except ValueError:
        meta = {}
    return {
        "id": r["id"],
        "cabinId": r["cabin_id"],
        "userId": r["user_id"],
        "date": r["date"],
        "time": r["time"],
        "status": r["status"],
        "createdAt": r["created_at"],
        "updatedAt": r["updated_at"],
        "meta": meta,
    }


class BookingsStore:
    def __init__(self, db_path: str):
        self.db_path = db_path
        self._ensure_db()

    def _conn(self):
        conn = sqlite3.connect(self.db_path, timeout=5)
        conn.row_factory = sqlite3.Row
        return conn

    def _run(self, sql: str, params=()) -> Tuple[List[sqlite3.Row], int]:
        try:
            conn = self._conn()
            try:
                cur = conn.cursor()
                cur.execute(sql, params)
                rows = cur.fetchall()
                conn.commit()
                return rows, cur.rowcount
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"bookings store failure: {e}") from e

    def _execute(self, sql: str, params=()) -> List[sqlite3.Row]:
        rows, _ = self._run(sql, params)
        return rows

    def _ensure_db(self) -> None:
        self._execute(
            """
            CREATE TABLE IF NOT EXISTS bookings (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                id TEXT UNIQUE NOT NULL,
                cabin_id TEXT,
                user_id TEXT,
                date TEXT,
                time TEXT,
                status TEXT,
                created_at TEXT,
                updated_at TEXT,
                meta TEXT
            )
            """
        )

    def add(self, doc: Dict) -> str:
        booking_id = generate_booking_id()
        self._execute(
            "INSERT INTO bookings (id, cabin_id, user_id, date, time, status, created_at, updated_at, meta)"
            " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                booking_id,
                doc.get("cabinId"),
                doc.get("userId"),
                doc.get("date"),
                doc.get("time"),
                doc.get("status"),
                doc.get("createdAt"),
                doc.get("updatedAt"),
                json.dumps(doc.get("meta") or {}),
            ),
        )
        return booking_id

    def get(self, booking_id: str) -> Optional[Dict]:
        rows = self._execute("SELECT * FROM bookings WHERE id = ?", (booking_id,))
        return _row_to_doc(rows[0]) if rows else None

    def find(self, **equals) -> List[Dict]:
        query = "SELECT * FROM bookings"
        clauses = []
        vals = []
        for k, v in equals.items():
            if k not in COLUMNS or k == "meta":
                raise StoreError(f"Cannot query bookings by {k!r}")
            clauses.append(f"{COLUMNS[k]} = ?")
            vals.append(v)
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY seq"
        return [_row_to_doc(r) for r in self._execute(query, tuple(vals))]

    def update(self, booking_id: str, fields: Dict) -> Optional[Dict]:
        """Apply a partial update; returns the updated document or None if the id is unknown."""
        sets = []
        vals = []
        for k, v in fields.items():
            if k not in COLUMNS or k == "id":
                raise StoreError(f"Cannot update booking field {k!r}")
            sets.append(f"{COLUMNS[k]} = ?")
            vals.append(json.dumps(v or {}) if k == "meta" else v)
        if not sets:
            return self.get(booking_id)
        vals.append(booking_id)
        _, changed = self._run(f"UPDATE bookings SET {', '.join(sets)} WHERE id = ?", tuple(vals))
        if changed == 0:
            return None
        return self.get(booking_id)

    def reset(self) -> None:
        """Delete all bookings (admin action)."""
        self._execute("DELETE FROM bookings")
