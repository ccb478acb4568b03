import logging
from alchemy import create_app
from alchemy.core.store_registry import get_store


def run():
    # warmup off: we want to report exactly what this script adds
    app = create_app({"ALCHEMY_WARMUP": False})
    with app.app_context():
        store = get_store()
        if hasattr(store, "create_schema"):
            store.create_schema()
        added = store.seed_base_elements()
        print(f"✅ Added {added} base element(s)" if added else "ℹ️ Base elements already present")

        s = store.stats()
        print(f"\n📊 Summary")
        print(f"   Store:    {s['store']} (durable={s['durable']})")
        print(f"   Elements: {s['elements']}")
        print(f"   Recipes:  {s['recipes']}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    run()
