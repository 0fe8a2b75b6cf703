import os

bind = f"0.0.0.0:{os.getenv('PORT', '8000')}"
workers = int(os.getenv('GUNICORN_WORKERS', 2))
worker_class = "sync"
worker_tmp_dir = "/dev/shm"
max_requests = 1000
max_requests_jitter = 100
timeout = 30
keepalive = 5

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.getenv('LOG_LEVEL', 'info').lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process naming
proc_name = "contact-form-api"

# Database connections are opened per worker, after fork
preload_app = False


# Server hooks
def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info("Starting Gunicorn server")


def when_ready(server):
    """Called just after the server is started."""
    server.log.info(f"Gunicorn server is ready on {bind} "
                    f"({os.getenv('ENVIRONMENT', 'development')})")


def worker_exit(server, worker):
    """Close this worker's database connections on shutdown."""
    from django.db import connections
    connections.close_all()
    server.log.info(f"Worker {worker.pid} exited, database connections closed")
