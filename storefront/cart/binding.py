"""
Cart view binding.

The cart notifies listeners with ``on_cart_changed(total, emphasize)``; that is
the whole surface a rendering layer needs. ``CounterBinding`` keeps the render
state of the storefront's cart counters so the frontend (or a test) can read
what each badge should show without touching the DOM.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, Protocol

# Header badge, mobile menu badge, fixed mobile corner badge
DEFAULT_COUNTERS = ("cart-count", "cart-count-mobile", "cart-count-fixed")


class CartListener(Protocol):
    def on_cart_changed(self, total: int, emphasize: bool) -> None:
        ...


@dataclass
class CounterState:
    """What one counter badge should render."""
    text: str = "0"
    visible: bool = False
    highlighted: bool = False

    def to_dict(self) -> dict:
        return {"text": self.text, "visible": self.visible, "highlighted": self.highlighted}


@dataclass
class CounterBinding:
    """Tracks every registered counter; hidden at zero, highlighted on emphasized updates."""
    counters: Dict[str, CounterState] = field(default_factory=dict)

    @classmethod
    def for_counters(cls, names: Iterable[str] = DEFAULT_COUNTERS) -> "CounterBinding":
        return cls(counters={name: CounterState() for name in names})

    def on_cart_changed(self, total: int, emphasize: bool) -> None:
        visible = total != 0
        for state in self.counters.values():
            state.text = str(total)
            state.visible = visible
            state.highlighted = visible and emphasize

    def clear_highlight(self) -> None:
        """End the transient highlight (the frontend does this after ~300 ms)."""
        for state in self.counters.values():
            state.highlighted = False

    def to_dict(self) -> dict:
        return {name: state.to_dict() for name, state in self.counters.items()}
