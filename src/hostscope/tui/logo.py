"""Decorative ASCII art shown beside the system facts."""

LOGO = r"""
        .-----------------.
        |  .-----------.  |
        |  |  >_       |  |
        |  |           |  |
        |  |  hostscope|  |
        |  '-----------'  |
        '-------. .-------'
          ______| |______
         /  ::::::::::::  \
        /  ::::::::::::::  \
       '--------------------'
"""


def get_logo() -> str:
    return LOGO.strip("\n")
