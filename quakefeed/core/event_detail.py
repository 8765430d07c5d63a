"""Event detail products - Pure functions.

Extracts the preferred moment-tensor solution from a USGS event detail
document. The detail document is fetched by the shell; this module only
reads an already-parsed dict and never raises on malformed content.
"""

from dataclasses import dataclass
from typing import Any

from quakefeed.core.magnitude import MagnitudeClass, classify_magnitude


MOMENT_TENSOR = "moment-tensor"


@dataclass(frozen=True)
class MomentTensorSolution:
    """Derived-magnitude solution from a moment-tensor product.

    Attributes:
        derived_magnitude: Magnitude derived from the solution (optional)
        derived_magnitude_type: Type of the derived magnitude (e.g., 'Mww')
        source: Contributing network
        update_time_ms: Product update time in epoch milliseconds
        percent_double_couple: Double-couple percentage as a fraction (optional)
        scalar_moment: Scalar seismic moment in N·m (optional)
    """
    derived_magnitude: float | None
    derived_magnitude_type: str
    source: str
    update_time_ms: int
    percent_double_couple: float | None = None
    scalar_moment: float | None = None

    @property
    def magnitude_class(self) -> MagnitudeClass:
        return classify_magnitude(self.derived_magnitude)


def _to_float(value: Any) -> float | None:
    try:
        return float(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _products(detail: dict[str, Any], product_type: str) -> list[dict[str, Any]]:
    properties = detail.get("properties") or {}
    products = properties.get("products") or {}
    candidates = products.get(product_type) or []
    return [p for p in candidates if isinstance(p, dict)]


def select_preferred_product(
    products: list[dict[str, Any]],
) -> dict[str, Any] | None:
    """Pick the preferred product: highest preferredWeight, then latest update.

    Pure function.
    """
    if not products:
        return None

    return max(
        products,
        key=lambda p: (
            _to_int(p.get("preferredWeight")),
            _to_int(p.get("updateTime")),
        ),
    )


def parse_moment_tensor(detail: dict[str, Any]) -> MomentTensorSolution | None:
    """Extract the preferred moment-tensor solution from event detail.

    Pure function.

    Args:
        detail: Parsed USGS event detail GeoJSON

    Returns:
        MomentTensorSolution, or None if the event has no moment tensor
    """
    if not isinstance(detail, dict):
        return None

    product = select_preferred_product(_products(detail, MOMENT_TENSOR))
    if product is None:
        return None

    props = product.get("properties") or {}

    return MomentTensorSolution(
        derived_magnitude=_to_float(props.get("derived-magnitude")),
        derived_magnitude_type=props.get("derived-magnitude-type") or "",
        source=product.get("source") or "",
        update_time_ms=_to_int(product.get("updateTime")),
        percent_double_couple=_to_float(props.get("percent-double-couple")),
        scalar_moment=_to_float(props.get("scalar-moment")),
    )
