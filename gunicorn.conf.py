"""Gunicorn configuration for EDGEBLOCK production deployment."""

# Server socket
bind = '127.0.0.1:8080'

# Worker processes
workers = 2
worker_class = 'sync'

# Timeout
timeout = 60

# Logging
accesslog = '-'
errorlog = '-'
loglevel = 'info'
