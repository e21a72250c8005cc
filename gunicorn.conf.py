import multiprocessing
import os

bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"

# Every open live-call socket holds one worker thread for its lifetime
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2))
threads = int(os.getenv("GUNICORN_THREADS", 8))

# gthread lets simple-websocket take over the request socket
worker_class = "gthread"

# Live calls outlast ordinary requests
timeout = 120
graceful_timeout = 30

accesslog = "-"
errorlog = "-"
loglevel = "info"
proc_name = "meetai_backend"


def when_ready(server):
    server.log.info(
        "Serving up to %s concurrent live-call sockets (%s workers x %s threads)",
        workers * threads,
        workers,
        threads,
    )
