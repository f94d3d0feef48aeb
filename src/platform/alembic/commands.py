"""Alembic command shortcuts registered as project scripts."""

import subprocess
import sys

from src.platform.constant.path import ALEMBIC_DIR


ALEMBIC_INI = ALEMBIC_DIR / 'alembic.ini'


def run_alembic(args: list[str]) -> int:
    return subprocess.call(['alembic', '-c', str(ALEMBIC_INI), *args])


def upgrade() -> int:
    """Upgrade database to latest migration."""
    return run_alembic(['upgrade', 'head'])


def downgrade() -> int:
    """Downgrade database by one migration."""
    return run_alembic(['downgrade', '-1'])


def make_migration() -> int:
    """Create a new migration from model changes."""
    if len(sys.argv) < 2:
        print("Usage: make-migration 'migration message'")
        return 1
    return run_alembic(['revision', '--autogenerate', '-m', ' '.join(sys.argv[1:])])
