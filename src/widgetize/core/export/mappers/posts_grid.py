"""Posts grid mapper."""

from __future__ import annotations

import re
from typing import Any

from widgetize.core.analysis import count_grid_tracks
from widgetize.core.dom import selector as css
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import ExportContext, WidgetMapper, outermost, yes_no
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

POST_ITEMS = 'article, [class*="post-item"], [class*="blog-post"], [class*="post-card"], [class*="type-post"]'
CARD_ITEMS = '[class*="card"], [class*="post"]'
TITLE = 'h1, h2, h3, h4, h5, h6, [class*="title"]'
EXCERPT = 'p, [class*="excerpt"], [class*="summary"]'
META = 'time, [class*="meta"], [class*="date"], [class*="author"], [class*="byline"]'
READ_MORE = '[class*="read-more"], [class*="readmore"], [class*="more-link"]'
COLUMN_CLASS = re.compile(r"(?:^|\s)col-(?:(?:sm|md|lg|xl|xxl)-)?(\d{1,2})(?:\s|$)")
TAILWIND_COLUMNS = re.compile(r"(?:^|\s)(?:\w+:)?grid-cols-(\d+)(?:\s|$)")

DEFAULT_COLUMNS = 3
MAX_COLUMNS = 6


def extract_posts(element: DOMNode) -> list[DOMNode]:
    posts = outermost(css.select(element, POST_ITEMS))
    if posts:
        return posts
    return outermost(css.select(element, CARD_ITEMS))


def _has_read_more(post: DOMNode) -> bool:
    if css.select_one(post, READ_MORE) is not None:
        return True
    return any("read more" in link.text_content.lower() for link in css.select(post, "a"))


class PostsGridMapper(WidgetMapper):
    """Maps blog listings to the ``posts`` widget (classic skin)."""

    COMPONENT_TYPES = (ComponentType.POSTS_GRID,)
    WIDGET_TYPE = "posts"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        posts = extract_posts(element)
        sample = posts[0] if posts else None

        meta = []
        if sample is not None:
            if css.select_one(sample, '[class*="author"], [rel="author"]') is not None:
                meta.append("author")
            if css.select_one(sample, 'time, [class*="date"]') is not None:
                meta.append("date")
            if css.select_one(sample, '[class*="comment"]') is not None:
                meta.append("comments")

        def present(selector: str) -> bool:
            return any(css.select_one(post, selector) is not None for post in posts)

        return {
            "_skin": "classic",
            "posts_post_type": "post",
            "classic_columns": str(self._columns(element, posts, context)),
            "classic_posts_per_page": len(posts) or 6,
            "classic_thumbnail": "top" if present("img") else "none",
            "classic_show_title": yes_no(present(TITLE)),
            "classic_show_excerpt": yes_no(present(EXCERPT)),
            "classic_meta_data": meta if present(META) else [],
            "classic_show_read_more": yes_no(any(_has_read_more(post) for post in posts)),
            "classic_read_more_text": "Read More »",
        }

    @staticmethod
    def _columns(element: DOMNode, posts: list[DOMNode], context: ExportContext) -> int:
        """Column count from the grid template, then class conventions, then the post count."""
        containers = [element]
        if posts and posts[0].parent is not None and posts[0].parent is not element:
            containers.insert(0, posts[0].parent)

        for container in containers:
            tracks = count_grid_tracks(context.accessor.computed_style(container).get("grid-template-columns"))
            if tracks:
                return min(tracks, MAX_COLUMNS)
            match = TAILWIND_COLUMNS.search(container.class_name)
            if match and int(match.group(1)) > 0:
                return min(int(match.group(1)), MAX_COLUMNS)

        if posts:
            match = COLUMN_CLASS.search(posts[0].class_name)
            if not match and posts[0].parent is not None:
                match = COLUMN_CLASS.search(posts[0].parent.class_name)
            if match and 0 < int(match.group(1)) <= 12:
                return max(1, min(12 // int(match.group(1)), MAX_COLUMNS))
            return min(len(posts), DEFAULT_COLUMNS)

        return DEFAULT_COLUMNS
