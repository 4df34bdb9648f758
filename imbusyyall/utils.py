"""
Utilities - Fake data helpers shared by the data sources
"""
import random
from datetime import datetime, timedelta
from typing import Dict, Hashable, TypeVar

from faker import Faker

fake = Faker()

K = TypeVar("K", bound=Hashable)


def seed(value: int) -> None:
    """Seed both random and Faker so a run can be replayed"""
    random.seed(value)
    Faker.seed(value)


def timestamp(fmt: str = "%Y-%m-%d %H:%M:%S.%f") -> str:
    """Random time within the last day"""
    moment = datetime.now() - timedelta(seconds=random.uniform(0, 24 * 60 * 60))
    text = moment.strftime(fmt)
    # %f is microseconds; the logs we mimic print milliseconds
    if fmt.endswith("%f"):
        text = text[:-3]
    return text


def now(fmt: str) -> str:
    return datetime.now().strftime(fmt)


def ip_address() -> str:
    return fake.ipv4()


def random_duration(minimum: float, maximum: float) -> float:
    """Random duration in milliseconds rounded to one decimal"""
    return round(random.uniform(minimum, maximum), 1)


def weighted_choice(weights: Dict[K, float]) -> K:
    """Pick a key of ``weights`` with probability proportional to its value"""
    keys = list(weights.keys())
    return random.choices(keys, weights=list(weights.values()), k=1)[0]


def hex_id(length: int = 24) -> str:
    return fake.hexify("^" * length)


def uuid() -> str:
    return fake.uuid4()
