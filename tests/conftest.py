import sys
from pathlib import Path


# Make ``treasury_yield_lab`` and the demo module importable from a source checkout
pkg_src = Path(__file__).resolve().parents[1] / "src"
if str(pkg_src) not in sys.path:
    sys.path.insert(0, str(pkg_src))
