"""
Pytest configuration to ensure paths are set up correctly for tests.

This allows imports like `from handlers import main` to work when running
tests, simulating the Lambda environment where code is deployed from the
src/ directory.
"""

import os
import sys
from pathlib import Path


def _ensure_paths_on_sys_path() -> None:
    """Add repository root AND src/ to sys.path if missing.

    The src/ directory is added to simulate Lambda's import behavior,
    where Code.from_asset("src") makes src/ the root of the package.
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"

    root_str = str(repo_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_paths_on_sys_path()

# Offline-friendly AWS defaults so no test needs real credentials.
os.environ.setdefault("AWS_REGION", "ap-south-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "ap-south-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("AWS_SESSION_TOKEN", "test")
os.environ.setdefault("ENVIRONMENT", "dev")

# Lambda environment variables used by handlers
os.environ.setdefault("APPLICANTS_TABLE", "test-applicants")
os.environ.setdefault("TICKETS_TABLE", "test-tickets")
os.environ.setdefault("ATTACHMENTS_BUCKET", "test-attachments")
