import os

# Keep telelog off the console while tests run.
os.environ.setdefault("BEAN_EDITOR_DISABLE_CONSOLE", "1")
os.environ.setdefault("BEAN_EDITOR_LOG_LEVEL", "WARNING")
