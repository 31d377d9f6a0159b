from flask import request

from domain.progress import parse_int_param


def optional_int_arg(name):
    """Integer query argument, ``None`` when absent or blank."""
    return parse_int_param(name, request.args.get(name))
