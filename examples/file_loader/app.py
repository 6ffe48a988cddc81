"""File-based templates -- the most common real-world pattern.

Loads templates from disk with FileSystemLoader. The navigation include is
rendered once, when the page is compiled; only the page body changes on
later renders.

Run:
    python app.py
"""

from pathlib import Path

from htmpl import Environment, FileSystemLoader

templates_dir = Path(__file__).parent / "templates"
env = Environment(loader=FileSystemLoader(str(templates_dir)), keep_newlines=True)

page = env.get_template(
    "page.tmpl",
    data={
        "nav_items": [
            {"url": "/", "label": "Home"},
            {"url": "/shop?q=all items", "label": "Shop & more"},
        ],
        "title": "Shop",
        "items": [
            {"name": "Teapot", "in_stock": True},
            {"name": "Kettle", "in_stock": False},
        ],
    },
)

shop_output = page.render()
empty_output = page.render({"title": "Shop", "items": []})


def main() -> None:
    print("=== Shop ===")
    print(shop_output)
    print("=== Empty ===")
    print(empty_output)


if __name__ == "__main__":
    main()
