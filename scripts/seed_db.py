from __future__ import annotations

import importlib
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "membership"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from membership.database.bootstrap import ensure_admin_user


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    user_id = ensure_admin_user(
        db_config,
        name=os.getenv("ADMIN_NAME", "admin"),
        password=os.getenv("ADMIN_PASSWORD", "admin"),
        role_name=getattr(settings, "ADMIN_ROLE_NAME", "Administrator"),
    )

    print(
        f"OK: admin account id={user_id} -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
