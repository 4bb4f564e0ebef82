import os
import tempfile

# Point settings at a throwaway SQLite file before anything imports the app.
# A file (not :memory:) so threadpool routes and leaderboard workers share tables.
_tmp = tempfile.mkdtemp(prefix="fitgoals-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite+pysqlite:///{os.path.join(_tmp, 'test.db')}")
os.environ.setdefault("UPLOADS_DIR", os.path.join(_tmp, "uploads"))
os.environ.setdefault("TIMEZONE", "UTC")
os.environ.setdefault("STORAGE_URL", "")
