"""Seed prices and per-symbol parameters for the quote simulator."""

# Starting prices for commonly quoted USDT pairs
SEED_PRICES: dict[str, float] = {
    "TONUSDT": 5.40,
    "BTCUSDT": 65000.00,
    "ETHUSDT": 3200.00,
    "SOLUSDT": 150.00,
    "DOGEUSDT": 0.15,
}

# Per-symbol GBM parameters
# sigma: annualized volatility (higher = more price movement)
# mu: annualized drift / expected return
SYMBOL_PARAMS: dict[str, dict[str, float]] = {
    "TONUSDT": {"sigma": 0.80, "mu": 0.05},
    "BTCUSDT": {"sigma": 0.55, "mu": 0.10},
    "ETHUSDT": {"sigma": 0.65, "mu": 0.08},
    "SOLUSDT": {"sigma": 0.90, "mu": 0.05},
    "DOGEUSDT": {"sigma": 1.10, "mu": 0.00},  # Meme coin, no drift
}

# Default parameters for symbols not listed above
DEFAULT_PARAMS: dict[str, float] = {"sigma": 0.75, "mu": 0.05}

# Range for the random seed price of an unknown symbol
UNKNOWN_SEED_RANGE: tuple[float, float] = (1.0, 100.0)
