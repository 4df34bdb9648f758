"""
Node - Express/morgan style logs from a Node.js service
"""
import random
from typing import List

from .. import utils
from ..colors import Colors, colorize, status_color
from .base import DataSource


class NodeSource(DataSource):
    """HTTP, database, error and process logs from an Express app"""

    name = "node"
    description = "Node.js/Express HTTP, database and error logs"

    ROUTES = [
        "/api/users", "/api/users/{id}", "/api/posts", "/api/posts/{id}/comments",
        "/api/auth/login", "/api/auth/logout", "/api/auth/refresh",
        "/api/products", "/api/products/{id}", "/api/orders",
        "/api/orders/{id}/items", "/api/search", "/api/analytics/events",
        "/api/upload", "/api/notifications", "/health", "/metrics", "/",
        "/dashboard", "/profile/{username}", "/settings", "/admin/users",
        "/admin/logs",
    ]

    HTTP_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

    LEVELS = {
        "error": (Colors.BRIGHT_RED, "ERROR"),
        "warn": (Colors.BRIGHT_YELLOW, "WARN"),
        "info": (Colors.BRIGHT_CYAN, "INFO"),
        "http": (Colors.GREEN, "HTTP"),
        "verbose": (Colors.BLUE, "VERBOSE"),
        "debug": (Colors.GRAY, "DEBUG"),
        "silly": (Colors.MAGENTA, "SILLY"),
    }

    STATUS_CODES = [200, 201, 204, 301, 302, 304, 400, 401, 403, 404, 422, 429, 500, 502, 503]

    ERROR_RESPONSES = {
        400: "Invalid request body",
        401: "Authentication required",
        403: "Insufficient permissions",
        404: "Resource not found",
        429: "Rate limit exceeded",
        500: "Internal server error",
    }

    ERROR_TYPES = [
        "TypeError", "ReferenceError", "SyntaxError", "RangeError",
        "ValidationError", "MongoError", "SequelizeError",
        "JsonWebTokenError", "MulterError", "AxiosError",
    ]

    ERROR_MESSAGES = [
        "Cannot read property 'id' of undefined",
        "Cannot set headers after they are sent to the client",
        "req.user is not defined",
        "Invalid token provided",
        "ECONNREFUSED 127.0.0.1:5432",
        "ENOENT: no such file or directory",
        "Unexpected token < in JSON at position 0",
        "Maximum call stack size exceeded",
        "connect ETIMEDOUT",
        "Request failed with status code 404",
        "Validation error: email must be unique",
        "JWT expired",
        "PayloadTooLargeError: request entity too large",
    ]

    # label, color, query template
    DB_STYLES = [
        ("Executing (default):", Colors.BLUE, "{query} " + Colors.GRAY + "({duration}ms)" + Colors.RESET),
        ("[MongoDB]", Colors.GREEN, "{query} " + Colors.GRAY + "+{duration_int}ms" + Colors.RESET),
        ("[Redis]", Colors.YELLOW, "{query} " + Colors.GRAY + "({duration}ms)" + Colors.RESET),
        ("[ES]", Colors.MAGENTA, "{query} " + Colors.GRAY + "took:{duration}ms" + Colors.RESET),
    ]

    DB_QUERIES = [
        "SELECT * FROM users WHERE email = $1",
        "INSERT INTO posts (title, content, user_id) VALUES ($1, $2, $3) RETURNING *",
        "UPDATE users SET last_login = NOW() WHERE id = $1",
        "DELETE FROM sessions WHERE expires_at < NOW()",
        "users.find({ email: 'user@example.com' })",
        "posts.aggregate([{ $match: { status: 'published' } }, { $sort: { createdAt: -1 } }])",
        "HGET session:abc123 user_id",
        "SETEX cache:user:123 3600 '{\"id\":123,\"name\":\"John\"}'",
        "GET /api/products/_search",
    ]

    MIDDLEWARE = [
        "cors", "helmet", "morgan", "body-parser", "express-session",
        "passport", "multer", "express-rate-limit", "compression",
        "cookie-parser",
    ]

    PROCESS_MESSAGES = [
        "Server running on port 3000",
        "Connected to MongoDB",
        "Redis client connected",
        "Database connection established",
        "Gracefully shutting down...",
        "Worker {worker} started with pid {pid}",
        "PM2: Starting execution sequence in -cluster mode- for app name:api id:0",
        "SIGTERM received, closing server...",
        "Unhandled rejection at:",
        "Memory usage: RSS: {rss}MB, Heap: {heap}MB",
        "CPU usage: {percent}%",
    ]

    DEBUG_MESSAGES = [
        "Cache hit for key: user:{id}",
        "Middleware stack: {middleware} -> {middleware2} -> router",
        "Query execution plan: SCAN -> FILTER -> SORT",
        "WebSocket connection established: client_{short_hex}",
        "Session created: {session}",
        "File uploaded: avatar_{id}.jpg ({kb}KB)",
    ]

    WARNING_MESSAGES = [
        "Deprecation warning: bodyParser() is deprecated, use express.json()",
        "Memory usage high: 85% of heap used",
        "Slow query detected: {slow}ms",
        "Rate limit approaching for IP: {ip}",
        "Failed to connect to Redis, using memory cache",
        "Large payload detected: {mb}MB",
    ]

    STACK_FRAMES = [
        "Router.handle (/app/node_modules/express/lib/router/index.js:{line}:{col})",
        "processTicksAndRejections (internal/process/task_queues.js:{line}:{col})",
        "async middleware (/app/src/middleware/auth.js:{line}:{col})",
        "UserController.getProfile (/app/src/controllers/user.controller.js:{line}:{col})",
        "Array.map (<anonymous>)",
        "Promise.then (<anonymous>)",
    ]

    USER_AGENTS = [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36",
        "PostmanRuntime/7.29.0",
        "axios/0.27.2",
        "node-fetch/1.0.0",
        "curl/7.79.1",
    ]

    def generate_log_entry(self) -> List[str]:
        roll = random.randrange(100)
        if roll <= 60:
            return self._http_logs()
        if roll <= 75:
            return [self._database_log()]
        if roll <= 85:
            return self._error_logs()
        if roll <= 92:
            return [self._leveled("info", self.fill(self.pick(self.PROCESS_MESSAGES), self._context()))]
        if roll <= 97:
            return [self._leveled("debug", self.fill(self.pick(self.DEBUG_MESSAGES), self._context()))]
        return [self._leveled("warn", self.fill(self.pick(self.WARNING_MESSAGES), self._context()))]

    def _context(self) -> dict:
        return {
            "id": random.randrange(1000),
            "username": f"user{random.randrange(100)}",
            "worker": random.randint(1, 8),
            "pid": random.randint(1000, 9999),
            "rss": random.randint(50, 200),
            "heap": random.randint(30, 150),
            "percent": random.randint(5, 95),
            "middleware": self.pick(self.MIDDLEWARE),
            "middleware2": self.pick(self.MIDDLEWARE),
            "short_hex": utils.hex_id(8),
            "session": utils.hex_id(32),
            "kb": random.randint(100, 5000),
            "slow": random.randint(1000, 5000),
            "ip": utils.ip_address(),
            "mb": random.randint(5, 50),
        }

    def _leveled(self, level: str, message: str) -> str:
        color, label = self.LEVELS[level]
        return f"{colorize(f'[{label}]', color)} {message}"

    def _response_time(self) -> int:
        roll = random.randrange(100)
        if roll <= 70:
            return random.randint(1, 50)
        if roll <= 90:
            return random.randint(51, 200)
        if roll <= 99:
            return random.randint(201, 1000)
        return random.randint(1001, 5000)

    def _http_logs(self) -> List[str]:
        method = self.pick(self.HTTP_METHODS)
        path = self.fill(self.pick(self.ROUTES), self._context())
        status = self.pick(self.STATUS_CODES)

        method_color = Colors.GREEN if method == "GET" else Colors.YELLOW
        stamp = utils.now("%Y-%m-%d %H:%M:%S")
        logs = [
            f"{colorize(f'[{stamp}]', Colors.GRAY)} "
            f"{colorize(method, method_color)} {path} "
            f"{colorize(status, status_color(status))} "
            f'{self._response_time()}ms - {utils.ip_address()} "{self.pick(self.USER_AGENTS)}"'
        ]

        if random.random() < 0.3:
            if method in ("POST", "PUT", "PATCH"):
                body = (
                    f"{{'email': 'user{random.randrange(1000)}@example.com', "
                    f"'name': 'Test User', 'timestamp': '{utils.now('%Y-%m-%dT%H:%M:%S.000Z')}'}}"
                )
            else:
                body = "undefined"
            logs.append(self._leveled("debug", f"Request body: {body}"))

        if status >= 400:
            logs.append(self._leveled("error", self.ERROR_RESPONSES.get(status, "Request failed")))

        return logs

    def _database_log(self) -> str:
        label, color, template = self.pick(self.DB_STYLES)
        duration = utils.random_duration(0.5, 50.0)
        message = self.fill(template, {
            "query": self.pick(self.DB_QUERIES),
            "duration": duration,
            "duration_int": int(duration),
        })
        return f"{colorize(label, color)} {message}"

    def _error_logs(self) -> List[str]:
        headline = colorize(f"{self.pick(self.ERROR_TYPES)}: {self.pick(self.ERROR_MESSAGES)}", Colors.RED)
        logs = [self._leveled("error", headline)]
        for _ in range(3):
            frame = self.fill(self.pick(self.STACK_FRAMES), {
                "line": random.randint(10, 500),
                "col": random.randint(1, 50),
            })
            logs.append(colorize(f"    at {frame}", Colors.GRAY))
        return logs
