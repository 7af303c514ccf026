import json
import os

import pytest

from traffic_monitor.config import Config
from traffic_monitor.web import create_app

NAMED_LINE = (
    "[+] 2025-12-11 23:31:42 | 192.168.1.201 (Redmi-13C) → graph.facebook.com "
    "(157.240.12.13) | fonte=TLS"
)
LEGACY_LINE = "[+] 2025-12-01 19:29:20 | 192.168.3.11 → exemplo.com (1.2.3.4) | fonte=DNS"


def write_log(path, lines):
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")


def make_line(second, client_ip="192.168.1.10", host="example.com"):
    return (
        f"[+] 2025-12-01 10:00:{second:02d} | {client_ip} (host-{client_ip}) → "
        f"{host} (93.184.216.34) | fonte=DNS"
    )


@pytest.fixture
def log_dir(tmp_path):
    path = tmp_path / "traffic-domains"
    path.mkdir()
    return path


@pytest.fixture
def log_file(log_dir):
    return str(log_dir / "traffic-domains.log")


@pytest.fixture
def config(tmp_path, log_file):
    return Config(
        log_file=log_file,
        bytes_file=str(tmp_path / "traffic-domains" / "traffic-bytes.json"),
        ignore_file=str(tmp_path / "etc" / "ignore-domains.txt"),
        web_dir=str(tmp_path / "web"),
    )


@pytest.fixture
def web_dir(config):
    os.makedirs(config.web_dir)
    with open(os.path.join(config.web_dir, "index.html"), "w") as f:
        f.write("<html><title>Traffic Monitor</title></html>")
    return config.web_dir


@pytest.fixture
def bytes_doc(config):
    doc = {
        "updated_at": "2025-12-01T10:00:00",
        "clients": {
            "192.168.1.20": {"bytes_in": 10, "bytes_out": 5, "bytes_total": 15},
            "192.168.1.3": {"bytes_in": 100, "bytes_out": 50, "bytes_total": 150},
        },
    }
    with open(config.bytes_file, "w") as f:
        json.dump(doc, f)
    return doc


@pytest.fixture
def app(config):
    """Create a Flask test app."""
    application = create_app(config)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()
