"""
Common utility functions for recordshape.
"""

# pylint: disable=line-too-long

import os
import re

import jinja2


def safe_name(name) -> str:
    """Convert a field name into a name made of identifier characters only."""
    if isinstance(name, int):
        name = '_'+str(name)
    val = re.sub(r'[^a-zA-Z0-9_]', '_', name)
    if not val or re.match(r'^[0-9]', val):
        val = '_' + val
    return val


def pascal(string):
    """
    Convert a string to PascalCase from snake_case, camelCase, kebab-case or PascalCase.
    Underscores at the beginning of the string are preserved in the output, but
    underscores in the middle of the string are removed.

    Args:
        string (str): The string to convert.

    Returns:
        str: The string in PascalCase.
    """
    if not string:
        return string
    words = []
    startswith_under = string[0] == '_'
    if '_' in string or '-' in string:
        words = re.split(r'[_\-]', string)
    elif string[0].isupper():
        words = re.findall(r'[A-Z][a-z0-9_]*', string)
    else:
        words = re.findall(r'[a-z0-9]+|[A-Z][a-z0-9_]*', string)
    result = ''.join(word.capitalize() for word in words)
    if startswith_under:
        result = '_' + result
    return result


def process_template(file_path: str, **kvargs) -> str:
    """
    Process a file as a Jinja2 template with the given keyword arguments as input.

    Args:
        file_path (str): The path to the template, relative to the package directory.
        **kvargs: The values to make available to the template.

    Returns:
        str: The processed template as a string.
    """
    file_dir = os.path.dirname(__file__)
    template_loader = jinja2.FileSystemLoader(searchpath=file_dir)
    template_env = jinja2.Environment(loader=template_loader)
    template_env.filters['pascal'] = pascal

    template = template_env.get_template(file_path)
    return template.render(**kvargs)
