import os
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))

if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
sys.path.append(os.path.join(ROOT, "test"))
sys.path.append(os.path.join(ROOT, "test", "tests"))
