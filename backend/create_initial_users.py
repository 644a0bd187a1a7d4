# backend/create_initial_users.py

import os
from typing import List

from inventario.database import SessionLocal
from inventario.apps.usuarios import models
from inventario.security import get_password_hash

# The two accounts the workshop starts with; both are protected from deletion.
SEED_USERS = [
    ("admin001", "admin", "ADMIN", "INITIAL_ADMIN_PASSWORD"),
    ("trab001", "trabajador", "TRABAJADOR", "INITIAL_WORKER_PASSWORD"),
]


def seed_users(db) -> List[models.Usuario]:
    created = []
    for user_id, username, rol, password_env in SEED_USERS:
        existing = db.query(models.Usuario).filter(models.Usuario.id == user_id).first()
        if existing:
            print(f"[INFO] User already exists: id={existing.id}, username={existing.username}")
            continue

        user = models.Usuario(
            id=user_id,
            username=username,
            password=get_password_hash(os.getenv(password_env, "ChangeMe123!")),
            rol=rol,
            activo=True,
        )
        db.add(user)
        created.append(user)

    db.commit()
    return created


def main() -> None:
    db = SessionLocal()
    try:
        for user in seed_users(db):
            print("[OK] Created user:")
            print(f"  id:       {user.id}")
            print(f"  username: {user.username}")
            print(f"  rol:      {user.rol}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
