"""Hello World -- the simplest htmpl example.

Compile a template from a string once and render it with different data.

Run:
    python app.py
"""

from htmpl import Environment

env = Environment()

# Compile from string
template = env.from_string('Hello, <tmpl_var name="name" escape="html">!')

# Render with data
output = template.render({"name": "World"})


def main() -> None:
    print(output)
    print()

    # Multiple renders reuse the compiled program
    for name in ["htmpl", "<Python>"]:
        print(template.render({"name": name}))


if __name__ == "__main__":
    main()
