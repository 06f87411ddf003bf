# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKFLOW_APP_NAME": "App display name (default: taskflow).",
    "TASKFLOW_LOG_LEVEL": "Console logging level (default: INFO).",
    # Front-end
    "TASKFLOW_CONSOLE_ENABLED": "Run the console REPL (true/false, default: true).",
    # Paths (gitignored)
    "TASKFLOW_DATA_DIR": "Local data directory (default: .local/taskflow).",
    "TASKFLOW_STORE_PATH": "Key-value SQLite path (default: <data_dir>/taskflow.sqlite3).",
    "TASKFLOW_LOG_DIR": "Directory for taskflow.log (default: <data_dir>).",
    # Persistence
    "TASKFLOW_STORAGE_SLOT": "Name of the slot holding the task snapshot (default: taskflow-tasks).",
}
