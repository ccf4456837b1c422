import datetime
import json
import sqlite3
import uuid
from contextlib import contextmanager
from typing import Any

from codebeat.db.models import MUSIC_GENERATION_TYPES, get_db_path


@contextmanager
def get_db_connection():
    conn = sqlite3.connect(get_db_path())
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def create_user(username: str, email: str) -> dict[str, Any]:
    row = {"id": _new_id(), "username": username, "email": email, "created_at": _now()}
    with get_db_connection() as conn:
        conn.execute(
            "INSERT INTO users (id, username, email, created_at) VALUES (?, ?, ?, ?)",
            (row["id"], row["username"], row["email"], row["created_at"]),
        )
    return row


def get_user(user_id: str) -> dict[str, Any] | None:
    with get_db_connection() as conn:
        cursor = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
        found = cursor.fetchone()
        return dict(found) if found else None


def create_project(user_id: str, name: str, description: str | None = None) -> dict[str, Any]:
    row = {
        "id": _new_id(),
        "user_id": user_id,
        "name": name,
        "description": description,
        "created_at": _now(),
    }
    with get_db_connection() as conn:
        conn.execute(
            "INSERT INTO projects (id, user_id, name, description, created_at) VALUES (?, ?, ?, ?, ?)",
            (row["id"], row["user_id"], row["name"], row["description"], row["created_at"]),
        )
    return row


def get_user_projects(user_id: str) -> list[dict[str, Any]]:
    with get_db_connection() as conn:
        cursor = conn.execute(
            "SELECT * FROM projects WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
            (user_id,),
        )
        return [dict(r) for r in cursor.fetchall()]


def create_code_translation(
    user_id: str,
    source_language: str,
    target_language: str,
    source_code: str,
    translated_code: str,
) -> dict[str, Any]:
    row = {
        "id": _new_id(),
        "user_id": user_id,
        "source_language": source_language,
        "target_language": target_language,
        "source_code": source_code,
        "translated_code": translated_code,
        "created_at": _now(),
    }
    with get_db_connection() as conn:
        conn.execute(
            """INSERT INTO code_translations (
                id, user_id, source_language, target_language, source_code, translated_code, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)""",
            tuple(row.values()),
        )
    return row


def get_user_code_translations(user_id: str) -> list[dict[str, Any]]:
    with get_db_connection() as conn:
        cursor = conn.execute(
            "SELECT * FROM code_translations WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
            (user_id,),
        )
        return [dict(r) for r in cursor.fetchall()]


def create_music_generation(user_id: str, type: str, prompt: str, result: dict[str, Any]) -> dict[str, Any]:
    if type not in MUSIC_GENERATION_TYPES:
        raise ValueError(f"Unknown music generation type: {type}")
    row = {
        "id": _new_id(),
        "user_id": user_id,
        "type": type,
        "prompt": prompt,
        "result": result,
        "created_at": _now(),
    }
    with get_db_connection() as conn:
        conn.execute(
            """INSERT INTO music_generations (id, user_id, type, prompt, result, created_at)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (row["id"], user_id, type, prompt, json.dumps(result), row["created_at"]),
        )
    return row


def get_user_music_generations(user_id: str) -> list[dict[str, Any]]:
    with get_db_connection() as conn:
        cursor = conn.execute(
            "SELECT * FROM music_generations WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
            (user_id,),
        )
        rows = []
        for r in cursor.fetchall():
            item = dict(r)
            item["result"] = json.loads(item["result"])
            rows.append(item)
        return rows
