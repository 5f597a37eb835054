import logging

from sqlcompose import (
    Finalizer,
    InMemoryMetricsAdapter,
    ObservabilitySettings,
    make_json_finalize_logger,
    raw,
    values,
    compile_template,
)
from sqlcompose.compiler.observability import compose_finalize_observers

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")
logger = logging.getLogger("sqlcompose.sample")

metrics = InMemoryMetricsAdapter()
finalizer = Finalizer(
    "$%d",
    observability_settings=ObservabilitySettings(
        finalize_observer=compose_finalize_observers(make_json_finalize_logger(logger=logger), metrics),
        metadata={"service": "sqlcompose-sample"},
    ),
)

finalizer.finalize("postgres", compile_template("SELECT * FROM users WHERE id IN ?", values(1, 2)))
try:
    finalizer.finalize("postgres", raw("SELECT * FROM users WHERE id = ?"))
except Exception as exc:
    print(f"finalize failed: {exc}")

for point in metrics.counters():
    print(point)
