"""Gunicorn configuration for the syndication receiver.

All logs are sent to stdout/stderr for Docker visibility via
`docker compose logs`.
"""

bind = "0.0.0.0:5000"

# Syndication requests are infrequent; a single sync worker is enough
workers = 1
worker_class = "sync"
timeout = 60  # media uploads to Mastodon can be slow
keepalive = 2

accesslog = "-"
errorlog = "-"
loglevel = "info"

# %(h)s remote IP, %(r)s request line, %(s)s status, %(D)s request time in microseconds
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s "%(a)s" %(D)s'

capture_output = True
enable_stdio_inheritance = True


def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info("Starting Gunicorn for syndication receiver")


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Gunicorn server is ready to accept connections")


def on_exit(server):
    """Called just before exiting Gunicorn."""
    server.log.info("Shutting down Gunicorn")


def worker_abort(worker):
    """Called when a worker receives a SIGABRT signal."""
    worker.log.error("Worker received SIGABRT signal - likely timeout")


preload_app = False
reload = False
daemon = False

limit_request_line = 4096
limit_request_fields = 100
limit_request_field_size = 8190
