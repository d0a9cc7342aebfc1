import sys
from pathlib import Path


CLIENT_PATH = Path(__file__).resolve().parents[1] / "client"
if str(CLIENT_PATH) not in sys.path:
    sys.path.append(str(CLIENT_PATH))
