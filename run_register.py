"""Run the register from a source checkout: python run_register.py [--sale FILE ...]."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from grocery_pos.cli.main import main  # noqa: E402

if __name__ == "__main__":
    main(sys.argv[1:])
