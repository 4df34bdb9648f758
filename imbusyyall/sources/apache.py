"""
Apache - httpd combined access log and error log
"""
import random
import re
from typing import List

from .. import utils
from ..colors import Colors, colorize
from .base import DataSource

APACHE_TIME_FORMAT = "%d/%b/%Y:%H:%M:%S +0000"


class ApacheSource(DataSource):
    """Mostly access log lines with occasional error and module chatter"""

    name = "apache"
    description = "Apache httpd combined access and error logs"

    RESOURCES = [
        "/", "/index.html", "/about.html", "/contact.html", "/products.html",
        "/services.html", "/blog/", "/blog/2024/01/web-development-trends",
        "/blog/2024/02/security-best-practices", "/api/v1/users",
        "/api/v1/products", "/api/v1/orders", "/admin/", "/admin/login",
        "/admin/dashboard", "/assets/css/main.css", "/assets/js/app.js",
        "/assets/js/jquery.min.js", "/assets/images/logo.png",
        "/assets/images/hero-banner.jpg", "/assets/fonts/roboto.woff2",
        "/favicon.ico", "/robots.txt", "/sitemap.xml", "/wp-admin/",
        "/wp-login.php", "/phpmyadmin/", "/downloads/whitepaper.pdf",
        "/search", "/newsletter/signup", "/user/profile", "/user/settings",
        "/checkout", "/payment/success", "/404.html", "/500.html",
    ]

    HTTP_METHODS = {"GET": 85, "POST": 10, "HEAD": 3, "PUT": 1, "DELETE": 1}

    METHOD_COLORS = {
        "GET": Colors.GREEN,
        "POST": Colors.BLUE,
        "PUT": Colors.YELLOW,
        "PATCH": Colors.YELLOW,
        "DELETE": Colors.RED,
    }

    # code: (weight, color)
    STATUS_CODES = {
        200: (70, Colors.GREEN),
        304: (10, Colors.CYAN),
        404: (8, Colors.YELLOW),
        301: (3, Colors.CYAN),
        302: (2, Colors.CYAN),
        403: (2, Colors.YELLOW),
        500: (2, Colors.RED),
        400: (1, Colors.YELLOW),
        401: (1, Colors.YELLOW),
        503: (1, Colors.RED),
    }

    # Response size ranges by file extension
    SIZE_RANGES = [
        (re.compile(r"\.(css|js)$"), (5000, 50000)),
        (re.compile(r"\.(png|jpg|jpeg|gif|woff2)$"), (10000, 500000)),
        (re.compile(r"\.(pdf|zip)$"), (100000, 5000000)),
        (re.compile(r"\.ico$"), (1000, 5000)),
        (re.compile(r"\.(html|php)$"), (2000, 20000)),
    ]

    REFERRERS = [
        "-", "https://www.google.com/",
        "https://www.google.com/search?q=web+development",
        "https://www.bing.com/search?q=apache+server", "https://github.com/",
        "https://stackoverflow.com/", "https://www.reddit.com/",
        "https://twitter.com/", "https://www.facebook.com/",
        "https://www.linkedin.com/", "https://news.ycombinator.com/",
        "https://dev.to/", "https://medium.com/",
    ]

    ERROR_LEVELS = {
        "emerg": Colors.BRIGHT_RED,
        "alert": Colors.BRIGHT_RED,
        "crit": Colors.RED,
        "error": Colors.RED,
        "warn": Colors.YELLOW,
        "notice": Colors.CYAN,
        "info": Colors.BLUE,
        "debug": Colors.GRAY,
    }

    ERROR_MESSAGES = [
        "server reached MaxRequestWorkers setting, consider raising the MaxRequestWorkers setting",
        "child process {pid} still did not exit, sending a SIGTERM",
        "caught SIGTERM, shutting down",
        "httpd (pid {pid}) already running",
        "mod_ssl: SSL handshake failed (server example.com:443, client {ip})",
        "File does not exist: /var/www/html/favicon.ico",
        "script not found or unable to stat: /var/www/cgi-bin/test.cgi",
        "Invalid command 'LoadModule', perhaps misspelled or defined by a module not included in the server configuration",
        "Permission denied: could not open error log file /var/log/apache2/error.log",
        "DocumentRoot [/var/www/html] does not exist",
    ]

    MODULES = [
        "mod_rewrite", "mod_ssl", "mod_headers", "mod_deflate", "mod_expires",
        "mod_security2", "mod_evasive", "mod_status", "mod_info", "mod_php",
    ]

    SSL_MESSAGES = [
        "SSL handshake successful",
        "SSL handshake failed: certificate verify failed",
        "SSL connection established",
        "SSL renegotiation failed",
        "SSL certificate expired",
    ]

    MODULE_MESSAGES = [
        "{module} loaded successfully",
        "{module} configuration updated",
        "{module} blocked suspicious request",
        "{module} cache hit for {resource}",
        "{module} processing request",
    ]

    STARTUP_MESSAGES = [
        "Apache/2.4.41 (Ubuntu) configured -- resuming normal operations",
        "Server built: 2021-06-10T08:01:13",
        "Command line: '/usr/sbin/apache2 -D FOREGROUND'",
        "mpm_prefork: module loaded",
        "Loaded DSO modules:",
        "Apache configured with worker MPM",
    ]

    def generate_log_entry(self) -> List[str]:
        roll = random.randrange(100)
        if roll <= 85:
            return [self._access_log()]
        if roll <= 95:
            return [self._error_log()]
        return [self.pick([self._ssl_log, self._module_log, self._startup_log])()]

    def _stamp(self) -> str:
        return colorize(f"[{utils.timestamp(APACHE_TIME_FORMAT)}]", Colors.GRAY)

    def _pid(self) -> str:
        return colorize(f"[pid {random.randint(1000, 9999)}]", Colors.GRAY)

    def _response_size(self, resource: str) -> int:
        for pattern, (low, high) in self.SIZE_RANGES:
            if pattern.search(resource):
                return random.randint(low, high)
        return random.randint(1000, 10000)

    def _access_log(self) -> str:
        method = utils.weighted_choice(self.HTTP_METHODS)
        resource = self.pick(self.RESOURCES)
        status = utils.weighted_choice({code: weight for code, (weight, _) in self.STATUS_CODES.items()})
        authuser = f"user{random.randrange(100)}" if random.random() < 0.05 else "-"
        method_color = self.METHOD_COLORS.get(method, Colors.GRAY)

        return (
            f"{colorize(utils.ip_address(), Colors.CYAN)} - {authuser} {self._stamp()} "
            f'"{colorize(method, method_color)} {resource} HTTP/1.1" '
            f"{colorize(status, self.STATUS_CODES[status][1])} {self._response_size(resource)} "
            f'"{colorize(self.pick(self.REFERRERS), Colors.MAGENTA)}" '
            f'"{colorize(utils.fake.user_agent(), Colors.GRAY)}"'
        )

    def _error_log(self) -> str:
        level = self.pick(list(self.ERROR_LEVELS))
        message = self.fill(self.pick(self.ERROR_MESSAGES), {
            "pid": random.randint(1000, 65535),
            "ip": utils.ip_address(),
        })
        return (
            f"{self._stamp()} {colorize(f'[{level}]', self.ERROR_LEVELS[level])} {self._pid()} "
            f"{colorize(f'[client {utils.ip_address()}]', Colors.CYAN)} {message}"
        )

    def _ssl_log(self) -> str:
        client = f"[client {utils.ip_address()}:{random.randint(30000, 65000)}]"
        return (
            f"{self._stamp()} {colorize('[ssl:info]', Colors.YELLOW)} {self._pid()} "
            f"{colorize(client, Colors.CYAN)} {self.pick(self.SSL_MESSAGES)}"
        )

    def _module_log(self) -> str:
        module = self.pick(self.MODULES)
        message = self.fill(self.pick(self.MODULE_MESSAGES), {
            "module": module,
            "resource": self.pick(self.RESOURCES),
        })
        return f"{self._stamp()} {colorize(f'[{module}:info]', Colors.BLUE)} {self._pid()} {message}"

    def _startup_log(self) -> str:
        return (
            f"{self._stamp()} {colorize('[mpm_prefork:notice]', Colors.GREEN)} {self._pid()} "
            f"{self.pick(self.STARTUP_MESSAGES)}"
        )
