"""
Gunicorn configuration for the Wellness Core API.

Env vars that override defaults:
  PORT       TCP port to bind (default: 8000)
  WORKERS    number of worker processes (default: 2)
  LOG_LEVEL  shared with the app's own logging (default: info)

Run with:  gunicorn app.main:app -c gunicorn.conf.py
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Dashboard and template routes are async; workers must run an event loop.
workers = int(os.environ.get("WORKERS", "2"))
worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# A template apply writes up to a dozen rows sequentially; leave headroom.
timeout = 60
graceful_timeout = 30

# stdout only, same stream as app logs
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'
