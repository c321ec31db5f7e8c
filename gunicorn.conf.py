"""
Gunicorn configuration for production deployment

Run with: gunicorn ojt_tracker.main:app -c gunicorn.conf.py
"""
import os

# Server socket
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
backlog = 512

# Worker processes
# Workers share nothing in memory; verification state lives in the database only
workers = int(os.getenv("GUNICORN_WORKERS", 2))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 100

# Worker lifecycle
max_requests = 1000  # Restart worker after 1000 requests
max_requests_jitter = 100  # Spread restarts out

# Timeouts
# Email is sent inside the request, so this must exceed EMAIL_TIMEOUT
timeout = 30
keepalive = 5
graceful_timeout = 30

# Process naming
proc_name = "ojt_tracker_api"

# Server mechanics
daemon = False  # Don't run as daemon (Docker handles this)
pidfile = None

# Logging
accesslog = "-"  # Log to stdout
errorlog = "-"   # Log to stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'


# Server hooks
def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info("Starting OJT Hours Tracker API")


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Gunicorn server is ready. Spawning %s workers", workers)


def worker_abort(worker):
    """Called when a worker is aborted (usually a request over the timeout)."""
    worker.log.warning("Worker %s aborted", worker.pid)
