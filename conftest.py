import os

# GUI tests render offscreen unless a display platform is requested
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
