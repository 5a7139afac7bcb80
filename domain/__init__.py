"""Describes the recipe remix domain. Centres around the current `Recipe`.

What is in here?

- A recipe comes from TheMealDB, either at random or by exact name.
- It is projected into display lines and a plain-text summary.
- The summary goes to a chat completions api to get a themed remix.
- Favorite recipe names are kept in a small durable key-value store.

Network services sit behind thin clients so they can be faked in tests.
"""
