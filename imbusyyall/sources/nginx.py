"""
Nginx - combined access log with timings, and the error log
"""
import random
from typing import List

from .. import utils
from ..colors import Colors, colorize, status_color
from .base import DataSource


class NginxSource(DataSource):
    """80% access log lines, 20% error log lines"""

    name = "nginx"
    description = "Nginx access and error logs"

    HTTP_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]

    METHOD_COLORS = {
        "GET": Colors.GREEN,
        "POST": Colors.YELLOW,
        "PUT": Colors.BLUE,
        "PATCH": Colors.BLUE,
        "DELETE": Colors.RED,
    }

    PATHS = [
        "/", "/index.html", "/api/v1/users", "/api/v1/users/123",
        "/api/v1/products", "/api/v1/products/search?q=laptop", "/api/v1/orders",
        "/api/v1/auth/login", "/api/v1/auth/logout", "/api/v1/auth/refresh",
        "/admin", "/admin/dashboard", "/admin/users", "/admin/reports",
        "/static/css/main.css", "/static/js/app.js", "/static/js/vendor.js",
        "/images/logo.png", "/images/banner.jpg", "/images/products/item-1234.jpg",
        "/favicon.ico", "/robots.txt", "/sitemap.xml", "/health", "/metrics",
        "/.well-known/acme-challenge/abc123", "/wp-admin", "/wp-login.php",
        "/xmlrpc.php", "/.git/config", "/.env", "/backup.sql", "/test.php",
        "/phpinfo.php",
    ]

    STATUS_CODES = {
        200: 0.60, 201: 0.02, 204: 0.02, 301: 0.03, 302: 0.03, 304: 0.08,
        400: 0.02, 401: 0.02, 403: 0.02, 404: 0.10, 405: 0.01, 422: 0.01,
        429: 0.01, 500: 0.02, 502: 0.005, 503: 0.005, 504: 0.01,
    }

    REFERRERS = [
        "-", "https://www.google.com/",
        "https://www.google.com/search?q=example+product",
        "https://www.bing.com/", "https://www.facebook.com/",
        "https://t.co/abc123", "https://www.reddit.com/r/programming",
        "https://example.com/", "https://example.com/products",
        "https://example.com/blog/article-123", "http://localhost:3000/",
        "https://analytics.example.com/dashboard",
    ]

    # level: (weight, color)
    ERROR_LEVELS = {
        "debug": (0.05, Colors.GRAY),
        "info": (0.15, Colors.GREEN),
        "notice": (0.10, Colors.CYAN),
        "warn": (0.30, Colors.YELLOW),
        "error": (0.30, Colors.RED),
        "crit": (0.08, Colors.BRIGHT_RED),
        "alert": (0.015, Colors.BRIGHT_RED),
        "emerg": (0.005, Colors.BRIGHT_MAGENTA),
    }

    ERROR_MESSAGES = {
        "debug": [
            "accept4() failed (24: Too many open files)",
            "epoll_wait() reported that client prematurely closed connection",
            "malloc: {num} bytes aligned to 16",
            'http script var: "{script_var}"',
        ],
        "info": [
            "client {ip} closed keepalive connection",
            "client timed out (110: Connection timed out) while waiting for request",
            "*{num} client prematurely closed connection",
            "Using {workers} worker processes",
            "signal process started",
        ],
        "notice": [
            "signal 15 (SIGTERM) received, exiting",
            "exiting",
            "exit",
            "reconfiguring",
            "reopening logs",
        ],
        "warn": [
            "*{num} client sent invalid method while reading client request line",
            "client sent plain HTTP request to HTTPS port while reading client request line",
            "*{num} no live upstreams while connecting to upstream",
            "upstream server temporarily disabled while reading response header from upstream",
            'conflicting server name "{vhost}" on 0.0.0.0:{port}, ignored',
        ],
        "error": [
            '*{num} open() "/var/www/html{path}" failed (2: No such file or directory)',
            "*{num} connect() failed (111: Connection refused) while connecting to upstream",
            "*{num} upstream timed out (110: Connection timed out) while reading response header from upstream",
            "*{num} recv() failed (104: Connection reset by peer) while reading response header from upstream",
            '*{num} directory index of "/var/www/html/" is forbidden',
            "*{num} SSL_do_handshake() failed (SSL: error:{ssl_code}:SSL routines:ssl3_read_bytes:sslv3 alert certificate expired) while SSL handshaking",
            "*{num} access forbidden by rule",
        ],
        "crit": [
            "*{num} SSL_write() failed (SSL: error:{ssl_code}:SSL routines:ssl3_write_bytes:bad length) while sending response to client",
            "accept4() failed (24: Too many open files)",
            "*{num} socket() failed (24: Too many open files) while connecting to upstream",
            'SSL_CTX_use_PrivateKey_file("/etc/nginx/ssl/cert.key") failed',
            'open() "/var/www/html{path}" failed (24: Too many open files)',
        ],
        "alert": [
            'could not open error log file: open() "/var/log/nginx/error.log" failed',
            "unable to set up signal handler",
            'socketpair() failed while spawning "worker process"',
        ],
        "emerg": [
            "bind() to 0.0.0.0:{listen_port} failed (98: Address already in use)",
            "still could not bind()",
            'open() "/var/www/html{path}" failed (13: Permission denied)',
            'BIO_new_file("/etc/nginx/ssl/cert.crt") failed',
            "configuration file /etc/nginx/nginx.conf test failed",
        ],
    }

    UPSTREAMS = [
        "backend_app", "api_servers", "static_servers", "websocket_backend",
        "auth_service", "payment_gateway", "search_cluster",
    ]

    VHOSTS = [
        "example.com", "www.example.com", "api.example.com", "admin.example.com",
        "static.example.com", "blog.example.com", "shop.example.com",
    ]

    def generate_log_entry(self) -> List[str]:
        if random.random() < 0.8:
            return [self._access_log()]
        return [self._error_log()]

    def _access_log(self) -> str:
        method = self.pick(self.HTTP_METHODS)
        status = utils.weighted_choice(self.STATUS_CODES)
        size = 0 if status == 304 else random.randint(100, 100000)
        request_time = round(random.uniform(0, 2), 3)
        upstream_time = "-" if status >= 500 else round(random.uniform(0, 1.5), 3)
        method_color = self.METHOD_COLORS.get(method, Colors.CYAN)

        return (
            f"{colorize(utils.ip_address(), Colors.CYAN)} - - [{utils.now('%d/%b/%Y:%H:%M:%S +0000')}] "
            f'"{colorize(method, method_color)} {self.pick(self.PATHS)} HTTP/1.1" '
            f"{colorize(status, status_color(status))} {size} "
            f'"{self.pick(self.REFERRERS)}" "{utils.fake.user_agent()}" '
            f"{colorize(f'{request_time} {upstream_time}', Colors.GRAY)}"
        )

    def _error_log(self) -> str:
        level = utils.weighted_choice({name: weight for name, (weight, _) in self.ERROR_LEVELS.items()})
        message = self.fill(self.pick(self.ERROR_MESSAGES[level]), {
            "num": random.randint(1, 9999),
            "ip": utils.ip_address(),
            "workers": random.randint(1, 16),
            "vhost": self.pick(self.VHOSTS),
            "port": random.randint(80, 443),
            "listen_port": self.pick(["80", "443", "8080"]),
            "path": self.pick(self.PATHS),
            "script_var": self.pick(["$remote_addr", "$http_host", "$request_uri"]),
            "ssl_code": f"{random.randint(0x10000000, 0xFFFFFFFF):08X}",
        })

        request = f'"{self.pick(self.HTTP_METHODS)} {self.pick(self.PATHS)} HTTP/1.1"'
        if "upstream" in message:
            client_info = (
                f", client: {utils.ip_address()}, server: {self.pick(self.VHOSTS)}, request: {request}, "
                f'upstream: "http://{self.pick(self.UPSTREAMS)}", host: "{self.pick(self.VHOSTS)}"'
            )
        elif "client" in message or "*" in message:
            client_info = f", client: {utils.ip_address()}, server: {self.pick(self.VHOSTS)}, request: {request}"
        else:
            client_info = ""

        color = self.ERROR_LEVELS[level][1]
        connection = colorize(f"*{random.randint(1000, 9999)}", Colors.YELLOW)
        return (
            f"{utils.now('%Y/%m/%d %H:%M:%S')} [{colorize(level, color)}] "
            f"{random.randint(1000, 65535)}#{random.randint(100, 999)}: {connection} {message}{client_info}"
        )
