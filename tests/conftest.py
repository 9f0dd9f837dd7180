"""Global pytest configuration for oasgen.

Ensures the ``src`` tree is importable regardless of whether the package has
been installed.
"""

import sys
from pathlib import Path

# Add the src directory to the Python path so ``import oasgen`` works
# without installing the project first
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"

if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))
