from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[2]

def load_env(env_path: Optional[Path] = None) -> bool:
    """Load config.env from the project root; real environment variables win."""
    path = env_path or PROJECT_ROOT / "config.env"
    if not path.exists():
        return False
    return load_dotenv(dotenv_path=path, override=False)
