"""
Syslog - Facilities, severities and message context shared by the
RFC 3164 and RFC 5424 sources
"""
import random
from abc import abstractmethod
from typing import Any, Dict, List

from .. import utils
from ..colors import Colors
from .base import DataSource

FACILITIES = {
    0: "kern",
    1: "user",
    2: "mail",
    3: "daemon",
    4: "auth",
    5: "syslog",
    6: "lpr",
    7: "news",
    8: "uucp",
    9: "cron",
    10: "authpriv",
    11: "ftp",
    16: "local0",
    17: "local1",
    18: "local2",
    19: "local3",
    20: "local4",
    21: "local5",
    22: "local6",
    23: "local7",
}

# Weighted towards info/notice with occasional warnings and rare errors
SEVERITY_WEIGHTS = {
    0: 0.001,
    1: 0.001,
    2: 0.008,
    3: 0.04,
    4: 0.15,
    5: 0.30,
    6: 0.40,
    7: 0.10,
}

SEVERITY_COLORS = {
    0: Colors.BRIGHT_RED,
    1: Colors.BRIGHT_RED,
    2: Colors.RED,
    3: Colors.RED,
    4: Colors.YELLOW,
    5: Colors.CYAN,
    6: Colors.GREEN,
    7: Colors.GRAY,
}

USERS = ["root", "admin", "deploy", "jenkins", "gitlab", "postgres", "www-data", "backup"]


def priority(facility: int, severity: int) -> int:
    """PRI value: facility * 8 + severity"""
    return facility * 8 + severity


class SyslogSource(DataSource):
    """Common machinery for syslog flavored sources.

    Subclasses provide ``MESSAGES`` and ``PROCESS_NAMES`` keyed by
    facility name and implement ``format_line``.
    """

    MESSAGES: Dict[str, List[str]] = {}
    PROCESS_NAMES: Dict[str, List[str]] = {}
    HOSTNAMES: List[str] = []
    FALLBACK_FACILITY = "daemon"

    def generate_log_entry(self) -> List[str]:
        facility = self.pick(list(FACILITIES))
        severity = utils.weighted_choice(SEVERITY_WEIGHTS)
        return [self.format_line(facility, severity)]

    @abstractmethod
    def format_line(self, facility: int, severity: int) -> str:
        """Render one line for a facility and severity"""

    def process_name(self, facility_name: str) -> str:
        return self.pick(self.PROCESS_NAMES.get(facility_name, ["process"]))

    def message(self, facility_name: str) -> str:
        templates = self.MESSAGES.get(facility_name) or self.MESSAGES[self.FALLBACK_FACILITY]
        return self.fill(self.pick(templates), self.context())

    def context(self) -> Dict[str, Any]:
        """Fake values for message templates"""
        fake = utils.fake
        return {
            "pid": random.randint(100, 65535),
            "num": random.randint(1, 9999),
            "port": self.pick([22, 80, 443, 3306, 5432, 6379, 8080, 9000]),
            "high_port": random.randint(1024, 65535),
            "ip": utils.ip_address(),
            "ip2": utils.ip_address(),
            "private_ip": fake.ipv4_private(),
            "mac": fake.mac_address(),
            "user": self.pick(USERS),
            "user2": self.pick(USERS),
            "uid": random.randint(0, 9999),
            "gid": random.randint(1000, 9999),
            "home": f"/home/{fake.user_name()}",
            "process": self.pick(["chrome", "firefox", "node", "ruby", "python", "java", "mysqld", "postgres"]),
            "score": random.randint(100, 999),
            "disk": f"/dev/nvme{random.randint(0, 3)}n1p{random.randint(1, 5)}",
            "iface": f"enp{random.randint(0, 3)}s{random.randint(0, 9)}",
            "cpu": random.randint(0, 7),
            "email": fake.email(),
            "host": fake.hostname(),
            "domain": fake.domain_name(),
            "queue_id": utils.hex_id(12).upper(),
            "size": random.randint(1000, 1000000),
            "count": random.randint(1, 50),
            "delay": round(random.uniform(0.1, 5.0), 2),
            "unit": self.pick(["nginx.service", "sshd.service", "docker.service", "cron.service", "postgresql.service"]),
            "target": self.pick(["multi-user.target", "network-online.target", "graphical.target"]),
            "status": self.pick(["active", "inactive", "running", "stopped", "failed"]),
            "key_type": self.pick(["RSA", "ED25519", "ECDSA"]),
            "fingerprint": f"SHA256:{utils.hex_id(43)}",
            "tty": self.pick(["pts/0", "pts/1", "ssh", "tty1"]),
            "job": self.pick(["backup", "db-maintenance", "log-rotation", "cache-clear", "report-generate"]),
            "command": self.pick(["/usr/local/bin/backup.sh", "run-parts /etc/cron.hourly", "php /var/www/artisan schedule:run"]),
            "exit_code": self.pick([0, 0, 0, 1, 2]),
            "duration": random.randint(1, 3600),
            "file": fake.file_path(depth=2),
            "rate": round(random.uniform(10, 5000), 2),
            "method": self.pick(["GET", "POST", "PUT", "DELETE", "PATCH"]),
            "path": self.pick(["/api/v2/users", "/api/v2/orders", "/health", "/metrics", "/graphql", "/login"]),
            "http_status": self.pick([200, 201, 204, 301, 302, 400, 401, 403, 404, 429, 500, 502, 503]),
            "user_agent": fake.user_agent(),
            "errno": self.pick(["111: Connection refused", "110: Connection timed out", "24: Too many open files"]),
            "backend": f"api-backend-{random.randint(1, 5)}",
            "server": f"srv{random.randint(1, 9)}",
            "database": self.pick(["production", "staging", "analytics", "reporting"]),
            "sql_error": self.pick([
                'syntax error at or near "FROM"',
                'relation "sessions" does not exist',
                'duplicate key value violates unique constraint "users_email_key"',
            ]),
            "container": f"app-{utils.hex_id(6)}",
            "image": self.pick(["myapp/api:v2.1.0", "nginx:1.21-alpine", "postgres:14.2", "redis:7-alpine"]),
            "volume": f"data-{utils.hex_id(6)}",
            "network": self.pick(["frontend", "backend", "database", "internal"]),
            "reason": self.pick(["invalid_password", "account_locked", "two_factor_required", "time"]),
            "lag": f"{random.randint(1, 300)}s",
        }
