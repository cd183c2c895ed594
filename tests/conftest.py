import sys
from pathlib import Path

# Ensure ``src`` is on the import path so ``linkstack`` is found uninstalled
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))
