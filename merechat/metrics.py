"""Merechat Prometheus 메트릭

실시간 채팅 핵심 메트릭:
1. Open Connections (CCU)
2. Connection Churn (연결/해제, 종료 사유)
3. Inbound Event Rate (type/result)
4. Broadcast Delivery (scope/result)
5. Write Latency
"""

import math

from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry(auto_describe=True)
METRICS_PATH = "/metrics"


def exponential_buckets_range(min_val: float, max_val: float, count: int) -> tuple:
    """min_val과 max_val 사이에 count개의 버킷을 지수적으로 분포시킴.

    Example:
        >>> exponential_buckets_range(0.001, 1.0, 4)
        (0.001, 0.01, 0.1, 1.0)
    """
    if count < 2:
        return (min_val, max_val)
    log_min = math.log(min_val)
    log_max = math.log(max_val)
    factor = (log_max - log_min) / (count - 1)
    return tuple(round(math.exp(log_min + factor * i), 4) for i in range(count))


# WebSocket Write Latency (1ms ~ 1s, 12 buckets)
WS_WRITE_BUCKETS = exponential_buckets_range(0.001, 1.0, 12)

# Connection Duration (1s ~ 1h, 15 buckets)
CONNECTION_DURATION_BUCKETS = exponential_buckets_range(1.0, 3600.0, 15)


def register_metrics(app: FastAPI) -> None:
    """Prometheus /metrics 엔드포인트 등록"""

    @app.get(METRICS_PATH, include_in_schema=False)
    async def metrics_endpoint() -> Response:
        return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


# ─────────────────────────────────────────────────────────────────────────────
# 1. CCU
# ─────────────────────────────────────────────────────────────────────────────

WS_CONNECTIONS_ACTIVE = Gauge(
    "merechat_ws_connections_active",
    "Active WebSocket sessions",
    registry=REGISTRY,
)

WS_REGISTERED_IDENTITIES = Gauge(
    "merechat_ws_registered_identities",
    "Identities currently present in the connection registry",
    registry=REGISTRY,
)

# ─────────────────────────────────────────────────────────────────────────────
# 2. Connection Churn
# ─────────────────────────────────────────────────────────────────────────────

WS_CONNECTIONS_OPENED = Counter(
    "merechat_ws_connections_opened_total",
    "Total WebSocket sessions opened",
    registry=REGISTRY,
)

WS_CONNECTIONS_CLOSED = Counter(
    "merechat_ws_connections_closed_total",
    "Total WebSocket sessions closed",
    labelnames=["reason"],  # client_disconnect, idle_timeout, error
    registry=REGISTRY,
)

WS_CONNECTION_DURATION = Histogram(
    "merechat_ws_connection_duration_seconds",
    "Duration of WebSocket sessions",
    registry=REGISTRY,
    buckets=CONNECTION_DURATION_BUCKETS,
)

WS_CONNECTIONS_SUPERSEDED = Counter(
    "merechat_ws_connections_superseded_total",
    "Registry entries overwritten by a newer connection for the same identity",
    registry=REGISTRY,
)

# ─────────────────────────────────────────────────────────────────────────────
# 3. Inbound Events
# ─────────────────────────────────────────────────────────────────────────────

WS_EVENTS_RECEIVED = Counter(
    "merechat_ws_events_received_total",
    "Inbound WebSocket events",
    labelnames=["type", "result"],  # result: handled, rejected, ignored
    registry=REGISTRY,
)

# ─────────────────────────────────────────────────────────────────────────────
# 4. Broadcast
# ─────────────────────────────────────────────────────────────────────────────

BROADCAST_DELIVERIES = Counter(
    "merechat_broadcast_deliveries_total",
    "Broadcast delivery attempts per peer",
    labelnames=["scope", "result"],  # scope: chat, global / result: delivered, offline, failed, timeout
    registry=REGISTRY,
)

PARTICIPANT_CACHE_LOOKUPS = Counter(
    "merechat_participant_cache_lookups_total",
    "Participant cache lookups",
    labelnames=["result"],  # hit, miss, error
    registry=REGISTRY,
)

# ─────────────────────────────────────────────────────────────────────────────
# 5. Write Latency
# ─────────────────────────────────────────────────────────────────────────────

WS_WRITE_LATENCY = Histogram(
    "merechat_ws_write_latency_seconds",
    "Time to write one event to one peer",
    registry=REGISTRY,
    buckets=WS_WRITE_BUCKETS,
)
