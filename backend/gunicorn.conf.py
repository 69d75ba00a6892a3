import os

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1
timeout = 60  # uploads to the asset host happen inside the request
graceful_timeout = 30
keepalive = 5

wsgi_app = "vidtube:create_app()"

# Logs to stdout/stderr
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Proxy headers are trusted by ProxyFix in the app
forwarded_allow_ips = "*"
proxy_protocol = False
