"""
Markdown Module - Markdown to HTML for blog posts and project write-ups

GitHub-flavoured extensions (tables, fenced code, strikethrough, task lists,
bare-URL autolinks), heading ids wrapped in anchor links and Pygments syntax
highlighting. Raw HTML in the source is escaped rather than passed through.
"""

import markdown
from flask import current_app
from markupsafe import Markup


MD_EXTENSIONS = [
    'tables',
    'sane_lists',
    'toc',
    'pymdownx.superfences',
    'pymdownx.highlight',
    'pymdownx.tilde',
    'pymdownx.tasklist',
    'pymdownx.magiclink',
]

MD_EXTENSION_CONFIGS = {
    'toc': {'anchorlink': True, 'permalink': False},
    'pymdownx.highlight': {'guess_lang': True, 'css_class': 'highlight'},
    'pymdownx.tilde': {'subscript': False},
    'pymdownx.tasklist': {'custom_checkbox': False},
}


class MarkdownError(Exception):
    pass


def _markdown_renderer():
    md = markdown.Markdown(
        extensions=MD_EXTENSIONS,
        extension_configs=MD_EXTENSION_CONFIGS,
        output_format='html',
    )
    # No raw HTML: the block and inline HTML handlers are dropped, so tags
    # fall through to the text handlers and come out escaped.
    md.preprocessors.deregister('html_block')
    md.inlinePatterns.deregister('html')
    return md


def markdown_to_html(text):
    """Convert a markdown string to HTML; blank input gives an empty string"""
    if not text or not text.strip():
        return ''

    try:
        return _markdown_renderer().convert(text)
    except Exception as e:
        current_app.logger.error(f"Markdown processing failed: {str(e)}")
        raise MarkdownError(f"Failed to process markdown content: {str(e)}") from e


def markdown_filter(text):
    """Jinja filter: rendered markdown marked safe, empty on failure"""
    try:
        return Markup(markdown_to_html(text))
    except MarkdownError:
        return Markup('')
