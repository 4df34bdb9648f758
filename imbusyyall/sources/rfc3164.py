"""
RFC 3164 - Traditional BSD syslog lines
"""
import random
from datetime import datetime

from ..colors import Colors, colorize
from .syslog import FACILITIES, SEVERITY_COLORS, SyslogSource, priority


class Rfc3164Source(SyslogSource):
    """<PRI>Mmm dd hh:mm:ss host tag[pid]: message"""

    name = "rfc3164"
    description = "BSD syslog (RFC 3164) lines"

    HOSTNAMES = [
        "web01", "web02", "app01", "app02", "db01", "db02", "mail01",
        "proxy01", "cache01", "log01", "monitor01", "backup01", "dev01",
        "staging01", "prod01", "prod02",
    ]

    PROCESS_NAMES = {
        "kern": ["kernel", "vmunix"],
        "user": ["login", "su", "sudo", "sshd"],
        "mail": ["postfix/smtp", "postfix/qmgr", "postfix/cleanup", "sendmail", "dovecot"],
        "daemon": ["systemd", "init", "chronyd", "NetworkManager"],
        "auth": ["sshd", "sudo", "login", "passwd", "su"],
        "syslog": ["rsyslogd", "syslog-ng"],
        "lpr": ["lpd", "cupsd"],
        "news": ["innd", "nnrpd"],
        "uucp": ["uucico", "uuxqt"],
        "cron": ["CRON", "crond", "anacron"],
        "authpriv": ["sshd", "sudo", "su"],
        "ftp": ["vsftpd", "proftpd", "pure-ftpd"],
        "local0": ["nginx", "apache2", "httpd"],
        "local1": ["haproxy", "keepalived"],
        "local2": ["postgresql", "mysql", "mariadb"],
        "local3": ["redis", "memcached"],
        "local4": ["docker", "containerd", "kubelet"],
        "local5": ["elasticsearch", "logstash", "kibana"],
        "local6": ["rabbitmq", "kafka"],
        "local7": ["app", "custom", "myapp"],
    }

    MESSAGES = {
        "kern": [
            "Out of memory: Kill process {pid} ({process}) score {score} or sacrifice child",
            "TCP: request_sock_TCP: Possible SYN flooding on port {port}. Sending cookies.",
            "EXT4-fs ({disk}): mounted filesystem with ordered data mode. Opts: errors=remount-ro",
            "Firewall: *DROP* IN={iface} OUT= MAC={mac} SRC={ip} DST={ip2}",
            "CPU{cpu}: Core temperature above threshold, cpu clock throttled",
            "USB disconnect, device number {count}",
            "IPv6: ADDRCONF(NETDEV_UP): {iface}: link is not ready",
        ],
        "user": [
            "session opened for user {user} by {user2}(uid={uid})",
            "session closed for user {user}",
            "FAILED LOGIN ({count}) on {tty} FOR {user}, Authentication failure",
            "password changed for {user}",
            "new user: name={user}, UID={uid}, GID={gid}, home={home}",
            "user {user} logged in from {ip}",
        ],
        "mail": [
            "from=<{email}>, size={size}, nrcpt=1 (queue active)",
            "to=<{email}>, relay={host}[{ip}]:25, delay={delay}, delays=0.1/0/0.2/0.3, dsn=2.0.0, status=sent",
            "connect from {host}[{ip}]",
            "disconnect from {host}[{ip}] ehlo=1 mail=1 rcpt=1 data=1 quit=1",
            "warning: {host}[{ip}]: SASL authentication failed",
            "reject: RCPT from {host}[{ip}]: 550 5.1.1 <{email}>: Recipient address rejected",
            "statistics: max connection rate {count}/60s for (smtp:{ip}) at {delay}",
        ],
        "daemon": [
            "Started {unit}",
            "Stopped {unit}",
            "Reloading {unit} configuration",
            "{unit}: Main process exited, code=exited, status={exit_code}/SUCCESS",
            "Device {disk} appeared",
            "Reached target {target}",
            "Failed to start {unit}",
        ],
        "auth": [
            "Accepted publickey for {user} from {ip} port {high_port} ssh2: {key_type} {fingerprint}",
            "Failed password for {user} from {ip} port {high_port} ssh2",
            "Invalid user {user} from {ip} port {high_port}",
            "pam_unix(sshd:session): session opened for user {user} by (uid={uid})",
            "pam_unix(sudo:session): session opened for user {user} by {user2}(uid={uid})",
            "authentication failure; logname={user} uid={uid} euid={uid} tty={tty} ruser={user2} rhost={ip} user={user}",
            "Server listening on 0.0.0.0 port 22",
        ],
        "cron": [
            "({user}) CMD ({command})",
            "({user}) RELOAD (/etc/cron.d/{job})",
            "pam_unix(crond:session): session opened for user {user} by (uid={uid})",
            "pam_unix(crond:session): session closed for user {user}",
            "({user}) ERROR (failed to open PAM security session)",
            '({user}) INFO (Job execution of "{job}" started)',
            '({user}) INFO (Job execution of "{job}" completed)',
        ],
        "ftp": [
            'CONNECT: Client "{ip}"',
            'OK LOGIN: Client "{ip}", anon password "{email}"',
            'FAIL LOGIN: Client "{ip}"',
            'OK UPLOAD: Client "{ip}", "{file}", {size} bytes, {rate} KB/sec',
            'OK DOWNLOAD: Client "{ip}", "{file}", {size} bytes, {rate} KB/sec',
            'OK DELETE: Client "{ip}", "{file}"',
            'FAIL DOWNLOAD: Client "{ip}", "{file}", Permission denied',
        ],
        "local0": [
            '{ip} [{delay}] "{method} {path} HTTP/1.1" {http_status} {size} "-" "{user_agent}"',
            'server {domain}, request: "{method} {path}", upstream: "http://{backend}", host: "{domain}"',
            "connect() failed ({errno}) while connecting to upstream",
            "SSL_do_handshake() failed (SSL: error:14094415:SSL routines:ssl3_read_bytes:sslv3 alert certificate expired) while SSL handshaking",
            '*{num} open() "{file}" failed (2: No such file or directory)',
            "client {ip} closed keepalive connection",
            "accept4() failed ({errno})",
        ],
        "local1": [
            "backend {backend} has no server available!",
            "Health check for server {backend}/{server} succeeded",
            "Health check for server {backend}/{server} failed",
            "Server {backend}/{server} is UP",
            "Server {backend}/{server} is DOWN",
            "Proxy {backend} started",
            "Connect from {ip}:{high_port} to {private_ip}:{port} ({backend}/HTTP)",
        ],
        "local2": [
            "connection received: host={ip} port={high_port}",
            "connection authorized: user={user} database={database}",
            "disconnection: session time: 0:{count}:{cpu}.{num} user={user} database={database} host={ip}",
            "ERROR: {sql_error} at character {count}",
            "FATAL: password authentication failed for user \"{user}\"",
            "WARNING: {sql_error}",
            "LOG: checkpoint starting: {reason}",
        ],
        "local3": [
            "Accepted {ip}:{high_port}",
            "Client {ip}:{high_port} connected",
            "Background saving started by pid {pid}",
            "DB saved on disk",
            "Connection closed by client {ip}:{high_port}",
            "Synchronization with replica {private_ip}:6379 succeeded",
            "# WARNING: overcommit_memory is set to 0! Background save may fail under low memory condition.",
        ],
        "local4": [
            "Container {container} Started",
            "Container {container} Stopped",
            "Image {image} Pulled",
            "Volume {volume} Created",
            "Network {network} Connected",
            "Health check for container {container} failed",
            "API listen on /var/run/docker.sock",
        ],
    }

    def format_line(self, facility: int, severity: int) -> str:
        facility_name = FACILITIES[facility]
        # RFC 3164 pads single-digit days with a space
        stamp = datetime.now().strftime("%b %d %H:%M:%S")
        if stamp[4] == "0":
            stamp = f"{stamp[:4]} {stamp[5:]}"
        tag = f"{self.process_name(facility_name)}[{random.randint(100, 65535)}]"

        return (
            f"{colorize(f'<{priority(facility, severity)}>', Colors.GRAY)}{stamp} "
            f"{colorize(self.pick(self.HOSTNAMES), Colors.CYAN)} {colorize(tag, Colors.YELLOW)}: "
            f"{colorize(self.message(facility_name), SEVERITY_COLORS[severity])}"
        )
