import sys
from pathlib import Path

# run against the source tree without installing
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))
