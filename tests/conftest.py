import os
import tempfile

# Keep app.log / audit.log out of the project tree during test runs.
os.environ.setdefault("TRUTHINESS_LOG_DIR", tempfile.mkdtemp(prefix="truthiness_logs_"))
