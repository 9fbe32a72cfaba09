from sqlalchemy import create_engine, Column, Integer, String, Boolean, Float, select, insert, update, delete
from sqlalchemy.orm import declarative_base
from sqlalchemy_easy import EasySession
from sqlalchemy_easy.base.catalog import ReflectedCatalog
from sqlalchemy_easy.base.cursor import EasyCursor
import argparse
import time
import random
from faker import Faker


random.seed(42)
Base = declarative_base()
fake = Faker()
CATEGORIES = list("ABCDEFGHIJK")

class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    name = Column(String)
    active = Column(Boolean, index=True)
    category = Column(String, index=True)
    price = Column(Float, index=True)
    cost = Column(Float)

def generate_values():
    return dict(
        name=fake.name(),
        active=random.choice([True, False]),
        category=random.choice(CATEGORIES),
        price=round(random.uniform(5, 500), 2),
        cost=round(random.uniform(1, 300), 2),
    )

def timed(label, fn, *args):
    start = time.time()
    fn(*args)
    duration = time.time() - start
    print(f"{label} in {duration:.2f} seconds.")
    return duration


class CoreRunner:
    """Plain SQLAlchemy Core, for reference."""
    def __init__(self, engine):
        self.engine = engine

    def inserts(self, rows):
        with self.engine.begin() as conn:
            for values in rows:
                conn.execute(insert(Item).values(**values))

    def selects(self, categories):
        with self.engine.connect() as conn:
            for category in categories:
                conn.execute(select(Item).where(Item.category == category, Item.price > 100)).mappings().all()

    def updates(self, ids):
        with self.engine.begin() as conn:
            for rid in ids:
                conn.execute(update(Item).where(Item.id == rid).values(name=fake.name(), active=random.choice([True, False])))

    def deletes(self, ids):
        with self.engine.begin() as conn:
            for rid in ids:
                conn.execute(delete(Item).where(Item.id == rid))


class EasyRunner:
    def __init__(self, engine):
        self.session = EasySession(EasyCursor(engine), catalog=ReflectedCatalog(engine))

    def inserts(self, rows):
        for values in rows:
            self.session.insert("items", values)

    def selects(self, categories):
        for category in categories:
            self.session.select("SELECT * FROM items WHERE category = ? AND price > ?", [category, 100])

    def updates(self, ids):
        for rid in ids:
            self.session.update(
                "items",
                {"name": fake.name(), "active": random.choice([True, False])},
                "id = ?",
                [rid],
            )

    def deletes(self, ids):
        for rid in ids:
            self.session.delete("DELETE FROM items WHERE id = ?", [rid])


def run_benchmark(runner_type="easy", count=10_000):
    print(f"Running benchmark: type={runner_type}, count={count}")

    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)

    if runner_type == "core":
        runner = CoreRunner(engine)
    elif runner_type == "easy":
        runner = EasyRunner(engine)
    else:
        raise ValueError("Invalid --type. Use 'core' or 'easy'.")

    rows = [generate_values() for _ in range(count)]
    elapsed = timed(f"Inserted {count} items", runner.inserts, rows)

    categories = [random.choice(CATEGORIES) for _ in range(500)]
    elapsed += timed("Executed 500 select queries", runner.selects, categories)

    random_ids = random.sample(range(1, count + 1), 500)
    elapsed += timed("Executed 500 updates", runner.updates, random_ids)

    random_ids = random.sample(range(1, count + 1), 500)
    elapsed += timed("Deleted 500 items", runner.deletes, random_ids)

    print(f"Total runtime for {runner_type}: {elapsed:.2f} seconds.")



if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--type", choices=["core", "easy"], required=True)
    parser.add_argument("--count", type=int, default=10_000)
    args = parser.parse_args()
    run_benchmark(args.type, args.count)
