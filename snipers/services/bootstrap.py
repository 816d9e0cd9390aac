import logging

from snipers.core.security import hash_password
from snipers.models import PositionType
from snipers.services.repository import Repository

logger = logging.getLogger(__name__)

DEMO_USER = {
    "username": "demouser",
    "email": "demo@example.com",
    "name": "Dianne Russell",
    "phone": "+912233445566",
    "password": "password123",
    "api_key": "demo-api-key",
    "api_secret": "demo-api-secret",
}

DELTA_NEUTRAL = {
    "name": "Advanced Delta Neutral",
    "description": "A delta neutral strategy for volatile markets",
    "type": "OPTION",
    "max_drawdown": 0,
    "margin": 0,
    "config": {
        "instruments": [
            {"name": "Sell NIFTY BANK ATM O CE"},
            {"name": "Sell NIFTY BANK ATM O PE"},
        ],
        "startTime": "9:22",
        "endTime": "15:11",
        "segmentType": "OPTION",
        "strategyType": "Time Based",
    },
    "is_deployed": False,
}

BTC_LONG = {
    "symbol": "BTCUSDT",
    "exchange": "Bybit",
    "value": 25227.92,
    "entry_price": 27451.50,
    "mark_price": 34487.32,
    "unrealized_pnl": 6465.92,
    "unrealized_pnl_percentage": 25.63,
    "realized_pnl": 2189.78,
    "realized_pnl_percentage": 8.68,
    "leverage": 100,
    "position_type": PositionType.LONG,
    "is_isolated": True,
}

DEMO_ASSETS = {
    symbol: {"percentage": 6, "value": 245.67}
    for symbol in ("BTC", "ETH", "BNB", "SOL", "ARB", "SAND")
}


def seed_demo_data(repo: Repository) -> None:
    """Load the demo account and its sample records into an empty store."""
    if repo.count_users():
        return

    profile = dict(DEMO_USER)
    password_hash, password_salt = hash_password(profile.pop("password"))
    user = repo.create_user(password_hash=password_hash, password_salt=password_salt, **profile)

    first = repo.create_strategy(user.id, **DELTA_NEUTRAL)
    repo.create_strategy(user.id, **{**DELTA_NEUTRAL, "is_deployed": True})
    repo.create_strategy(user.id, **DELTA_NEUTRAL)

    repo.create_position(user.id, strategy_id=first.id, **BTC_LONG)
    repo.create_position(user.id, strategy_id=first.id, **{**BTC_LONG, "symbol": "ETHUSDT"})

    repo.create_portfolio_snapshot(user.id, total_value=12849.84, btc_value=0.440725, assets=DEMO_ASSETS)
    logger.info("Seeded demo data for %s", user.email)
