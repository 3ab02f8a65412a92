import sys
from pathlib import Path

# Add the src directory to sys.path so the top-level packages import
src_dir = Path(__file__).resolve().parent
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

# Handle --version before importing Qt
if "--version" in sys.argv or "-V" in sys.argv:
    from core.app_version import get_app_version
    print(f"SNSS Reader {get_app_version()}")
    sys.exit(0)

from app.main import main

if __name__ == "__main__":
    sys.exit(main())
