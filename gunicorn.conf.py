"""
Gunicorn configuration file for the quiz portal
Keep this file next to run.py
"""

import os

# ==================== WORKER CONFIGURATION ====================
# Threaded workers, pages wait on the REST API
workers = int(os.environ.get('WEB_CONCURRENCY', '2'))
threads = 4
worker_class = 'gthread'

# ==================== TIMEOUT ====================
# Keep above API_TIMEOUT
timeout = 60
graceful_timeout = 30
keepalive = 5

# ==================== MEMORY MANAGEMENT ====================
max_requests = 1000
max_requests_jitter = 50

# ==================== PRELOAD ====================
preload_app = True

# ==================== BINDING ====================
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# ==================== LOGGING ====================
accesslog = '-'  # stdout
errorlog = '-'   # stderr
loglevel = 'info'

backlog = 2048


# ==================== HOOKS ====================
def on_starting(server):
    server.log.info(f'Quiz portal starting: {workers} workers x {threads} threads, timeout {timeout}s')


def worker_int(worker):
    worker.log.warning(f'Worker {worker.pid} interrupted')


def worker_abort(worker):
    worker.log.error(f'Worker {worker.pid} aborted')


def post_fork(server, worker):
    server.log.info(f'Worker {worker.pid} spawned')


def worker_exit(server, worker):
    server.log.info(f'Worker {worker.pid} exited')
