"""
RFC 5424 - Structured syslog lines
"""
import random
from datetime import datetime, timezone
from typing import Callable, Dict, List, Union

from .. import utils
from ..colors import Colors, colorize
from .syslog import FACILITIES, SEVERITY_COLORS, SyslogSource, priority

SYSLOG_VERSION = 1

# SD-ID -> param name -> choices or a callable producing a value
STRUCTURED_DATA: Dict[str, Dict[str, Union[List[str], Callable[[], str]]]] = {
    "timeQuality": {
        "tzKnown": ["0", "1"],
        "isSynced": ["0", "1"],
        "syncAccuracy": lambda: str(random.randint(100, 999999)),
    },
    "origin": {
        "ip": utils.ip_address,
        "enterpriseId": ["32473", "8072", "2021", "13335"],
        "software": ["rsyslogd", "syslog-ng", "systemd-journald", "custom-logger"],
        "swVersion": ["8.2102.0", "3.35.1", "249.11", "1.0.0"],
    },
    "meta": {
        "sequenceId": lambda: str(random.randint(1, 999999)),
        "sysUpTime": lambda: str(random.randint(100, 999999)),
        "language": ["en-US", "en-GB", "de-DE", "fr-FR"],
    },
    "exampleSDID@32473": {
        "iut": ["3", "4", "5"],
        "eventSource": ["Application", "System", "Security"],
        "eventID": lambda: str(random.randint(1000, 9999)),
    },
}

MSG_IDS = {
    "kern": ["KERNEL_OOM", "KERNEL_TCP", "KERNEL_FS", "KERNEL_NET", "KERNEL_CPU", "KERNEL_USB"],
    "auth": ["AUTH_SUCCESS", "AUTH_FAILURE", "SESSION_OPEN", "SESSION_CLOSE", "AUTH_KEY"],
    "authpriv": ["AUTH_SUCCESS", "AUTH_FAILURE", "SESSION_OPEN", "SESSION_CLOSE", "AUTH_KEY"],
    "mail": ["MAIL_ACCEPT", "MAIL_DELIVER", "MAIL_CONNECT", "MAIL_REJECT", "MAIL_QUEUE"],
    "cron": ["CRON_START", "CRON_FINISH", "CRON_ERROR", "CRON_RELOAD", "CRON_SKIP"],
    "local0": ["HTTP_ACCESS", "HTTP_ERROR", "SSL_ERROR", "BACKEND_ERROR", "CONFIG_RELOAD"],
    "local2": ["DB_CONNECT", "DB_QUERY", "DB_CHECKPOINT", "DB_VACUUM", "DB_REPLICATION"],
    "local4": ["CONTAINER_START", "CONTAINER_STOP", "IMAGE_PULL", "VOLUME_MOUNT", "HEALTH_CHECK"],
}

GENERIC_MSG_IDS = ["ID001", "ID002", "ID003", "ID004", "ID005"]


def structured_data(max_elements: int = 3, empty_chance: float = 0.3) -> str:
    """Render 0..max_elements SD-ELEMENTs, or the NILVALUE '-'"""
    if random.random() < empty_chance:
        return "-"

    elements = []
    for _ in range(random.randint(1, max_elements)):
        sd_id = random.choice(list(STRUCTURED_DATA))
        params = []
        for key, source in STRUCTURED_DATA[sd_id].items():
            value = source() if callable(source) else random.choice(source)
            params.append(f'{key}="{value}"')
        elements.append(f"[{sd_id} {' '.join(params)}]")
    return "".join(elements)


class Rfc5424Source(SyslogSource):
    """<PRI>1 TIMESTAMP HOST APP PROCID MSGID [SD] MSG"""

    name = "rfc5424"
    description = "Structured syslog (RFC 5424) lines"

    HOSTNAMES = [
        "prod-web-01", "prod-web-02", "prod-app-01", "prod-app-02",
        "prod-db-01", "prod-db-02", "prod-cache-01", "prod-queue-01",
        "staging-web-01", "staging-app-01", "staging-db-01", "dev-all-01",
        "monitoring-01", "logging-01", "backup-01",
    ]

    PROCESS_NAMES = {
        "kern": ["kernel", "vmunix", "linux"],
        "user": ["login", "su", "sudo", "sshd", "systemd-logind"],
        "mail": ["postfix", "sendmail", "dovecot", "exim", "smtp"],
        "daemon": ["systemd", "init", "chronyd", "NetworkManager", "dbus"],
        "auth": ["sshd", "sudo", "login", "passwd", "su", "pam"],
        "syslog": ["rsyslogd", "syslog-ng", "journald"],
        "lpr": ["lpd", "cupsd", "cups-browsed"],
        "news": ["innd", "nnrpd", "leafnode"],
        "uucp": ["uucico", "uuxqt"],
        "cron": ["cron", "crond", "anacron", "systemd-timer"],
        "authpriv": ["sshd", "sudo", "su", "polkitd"],
        "ftp": ["vsftpd", "proftpd", "pure-ftpd", "ftpd"],
        "local0": ["nginx", "apache2", "httpd", "caddy"],
        "local1": ["haproxy", "keepalived", "varnish", "traefik"],
        "local2": ["postgresql", "mysql", "mariadb", "mongodb"],
        "local3": ["redis", "memcached", "cassandra", "etcd"],
        "local4": ["docker", "containerd", "kubelet", "podman"],
        "local5": ["elasticsearch", "logstash", "kibana", "beats"],
        "local6": ["rabbitmq", "kafka", "nats", "mosquitto"],
        "local7": ["app", "custom", "myapp", "api-server"],
    }

    MESSAGES = {
        "kern": [
            "Out of memory: Killed process {pid} ({process}) total-vm:{size}kB, anon-rss:{size}kB, file-rss:{num}kB",
            "TCP: Possible SYN flooding on port {port}. Sending cookies. Check SNMP counters.",
            "EXT4-fs ({disk}): mounted filesystem with ordered data mode. Opts: relatime,discard. Quota mode: none.",
            "netfilter: nf_conntrack: table full, dropping packet from {ip} to {ip2}",
            "CPU{cpu}: Package temperature above threshold, cpu clock throttled (total events = {num})",
            "IPv6: ADDRCONF(NETDEV_CHANGE): {iface}: link becomes ready",
        ],
        "user": [
            "New session {num} of user {user} started for service ssh",
            "Session {num} logged out. Waiting for processes to exit.",
            "Failed to authenticate user {user} from {ip}: {reason}",
            "User {user} changed password successfully",
            "Created new user {user} (UID: {uid}, GID: {gid}, Home: {home})",
            "User {user} logged in successfully from {ip} using publickey authentication",
        ],
        "mail": [
            "Message {queue_id} from <{email}> accepted for delivery",
            "Delivered message {queue_id} to <{email}> via smtp[{ip}] (status=sent (250 OK))",
            "Connection from {host}[{ip}] established (TLS: TLSv1.3)",
            "Connection from {host}[{ip}] lost (duration={delay}s, messages={count})",
            "SASL authentication failed for user {user} from {host}[{ip}]: invalid_credentials",
            "Rejected message from {host}[{ip}] to <{email}>: spam_detected",
            "Queue manager: started delivery of {queue_id} (size={size} bytes)",
        ],
        "daemon": [
            "Started {unit} - {target}",
            "Stopped {unit} - {target} (Result: {status})",
            "Reloading {unit} configuration files",
            "Unit {unit} entered failed state with result exit-code",
            "Detected new device: {disk} (block)",
            "Reached target {target}",
            "Dependency failed for {unit} - {target}",
        ],
        "auth": [
            "Accepted publickey for {user} from {ip} port {high_port} ssh2: {key_type} {fingerprint}",
            "Failed password for {user} from {ip} port {high_port} ssh2",
            "Invalid user {user} from {ip} port {high_port}",
            "Session opened for user {user} (uid={uid}) by process {pid}",
            "Session closed for user {user}",
            "Authentication failure for user {user} from {ip} (reason: {reason})",
            "Server listening on 0.0.0.0 port 22 protocol ssh2",
        ],
        "cron": [
            'Job "{job}" started for user {user} (PID: {pid})',
            'Job "{job}" completed for user {user} (exit code: {exit_code}, duration: {duration}s)',
            "Reloaded configuration from /etc/cron.d/app-tasks",
            'Skipping job "{job}" for user {user} (system load too high)',
            'Error executing job "{job}" for user {user}: permission_denied',
            'Removed job "{job}" for user {user}',
        ],
        "local0": [
            '{ip} "{method} {path} HTTP/2.0" {http_status} {size} "-" "{user_agent}" rt={delay}',
            "SSL handshake failed for {ip}:{high_port} (error: certificate_expired)",
            "Backend connection failed to {backend}.internal:8080 (error: {errno})",
            "Rate limit exceeded for client {ip} (limit: 100 req/s)",
            "Configuration reloaded successfully (workers: {cpu})",
            "Worker process {pid} exited with code {exit_code}",
            "Upstream {backend} marked as down after {count} failed attempts",
        ],
        "local2": [
            "Connection authenticated: user={user} database={database} client={ip}:{high_port} ssl=on",
            "Query completed: duration={delay}ms user={user} database={database} query=\"SELECT * FROM users WHERE status = $1\"",
            "Checkpoint completed: wrote {num} buffers; sync time={delay}s, total time={duration}s",
            "Replication lag detected: {lag} behind primary",
            "Vacuum completed on public.sessions: removed {size} dead tuples",
            "Connection pool exhausted for database {database} (max_connections=100)",
        ],
        "local4": [
            "Container {container} started (image: {image}, id: {queue_id})",
            "Container {container} stopped (exit_code: {exit_code}, runtime: {duration}s)",
            "Image {image} pulled successfully (layers: {count})",
            "Volume {volume} mounted to container {container} at /data",
            "Network {network} connected to container {container} (ip: {private_ip})",
            "Health check failed for container {container} (consecutive_failures: {count})",
        ],
    }

    def format_line(self, facility: int, severity: int) -> str:
        facility_name = FACILITIES[facility]
        stamp = datetime.now(timezone.utc).astimezone().isoformat(timespec="microseconds")
        msg_id = self.pick(MSG_IDS.get(facility_name, GENERIC_MSG_IDS))

        return " ".join([
            colorize(f"<{priority(facility, severity)}>{SYSLOG_VERSION}", Colors.GRAY),
            colorize(stamp, Colors.BLUE),
            colorize(self.pick(self.HOSTNAMES), Colors.CYAN),
            colorize(self.process_name(facility_name), Colors.YELLOW),
            colorize(random.randint(100, 65535), Colors.GRAY),
            colorize(msg_id, Colors.MAGENTA),
            colorize(structured_data(), Colors.GRAY),
            colorize(self.message(facility_name), SEVERITY_COLORS[severity]),
        ])
