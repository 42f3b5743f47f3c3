"""Video playlist mapper."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from widgetize.core.dom import selector as css
from widgetize.core.dom.models import DOMNode
from widgetize.core.export.base import (
    ExportContext,
    WidgetMapper,
    background_url,
    image_url,
    is_truthy,
    outermost,
    text_of,
    yes_no,
)
from widgetize.core.recognition.engine import RecognizedComponent
from widgetize.core.recognition.types import ComponentType

VideoSource = Literal["youtube", "vimeo", "hosted"]

MAX_VIDEOS = 20
PLAYLIST_ITEMS = '[class*="video-item"], [class*="playlist-item"], [data-video], li'
EMBEDS = 'iframe[src*="youtube"], iframe[src*="youtu.be"], iframe[src*="vimeo"]'
ITEM_TITLE = '[class*="title"], h1, h2, h3, h4, h5, h6'
ITEM_DURATION = '[class*="duration"], [data-duration]'


@dataclass
class VideoEntry:
    """One playlist video."""

    title: str
    url: str
    source: VideoSource
    thumbnail: str = ""
    duration: str = ""


def video_source(url: str) -> VideoSource:
    if "youtube.com" in url or "youtu.be" in url:
        return "youtube"
    if "vimeo.com" in url:
        return "vimeo"
    return "hosted"


def _video_src(video: DOMNode) -> str:
    if video.get("src"):
        return video.get("src") or ""
    source = css.select_one(video, "source[src]")
    return (source.get("src") or "") if source is not None else ""


def _thumbnail(node: DOMNode, context: ExportContext) -> str:
    img = css.select_one(node, "img")
    if img is not None:
        return image_url(img)
    return (
        background_url(context.accessor.computed_style(node).get("background-image"))
        or node.get("data-thumbnail")
        or ""
    )


def _entry_from_item(item: DOMNode, context: ExportContext) -> VideoEntry | None:
    link = css.select_one(item, "a")
    iframe = css.select_one(item, "iframe")
    video = css.select_one(item, "video")

    if link is not None:
        url = link.href or link.get("data-video") or ""
    elif iframe is not None:
        url = iframe.src or ""
    elif video is not None:
        url = _video_src(video)
    else:
        url = item.get("data-video") or item.get("data-src") or ""
    if not url:
        return None

    title_node = css.select_one(item, ITEM_TITLE)
    duration_node = css.select_one(item, ITEM_DURATION)
    return VideoEntry(
        title=text_of(title_node) or item.get("data-title") or "Untitled Video",
        url=url,
        source=video_source(url),
        thumbnail=_thumbnail(item, context),
        duration=text_of(duration_node) or item.get("data-duration") or "",
    )


def extract_videos(element: DOMNode, context: ExportContext) -> list[VideoEntry]:
    """
    Extract playlist videos, at most 20.

    Tries playlist items, then embedded YouTube/Vimeo iframes, then
    ``<video>`` elements.
    """
    videos = [entry for item in outermost(css.select(element, PLAYLIST_ITEMS)) if (entry := _entry_from_item(item, context))]

    if not videos:
        for index, iframe in enumerate(css.select(element, EMBEDS), start=1):
            url = iframe.src or ""
            source = video_source(url)
            if source == "hosted":
                continue
            thumb = css.select_one(iframe.parent, "img") if iframe.parent is not None else None
            videos.append(
                VideoEntry(
                    title=iframe.get("title") or f"Video {index}",
                    url=url,
                    source=source,
                    thumbnail=image_url(thumb) if thumb is not None else "",
                )
            )

    if not videos:
        for index, video in enumerate(css.select(element, "video"), start=1):
            url = _video_src(video)
            if url:
                videos.append(
                    VideoEntry(title=f"Video {index}", url=url, source="hosted", thumbnail=video.get("poster") or "")
                )

    return videos[:MAX_VIDEOS]


class VideoPlaylistMapper(WidgetMapper):
    """Maps video lists to the ``video-playlist`` widget."""

    COMPONENT_TYPES = (ComponentType.VIDEO_PLAYLIST,)
    WIDGET_TYPE = "video-playlist"

    def build_settings(self, component: RecognizedComponent, context: ExportContext) -> dict[str, Any]:
        element = component.element
        tabs = []
        for index, video in enumerate(extract_videos(element, context), start=1):
            tab: dict[str, Any] = {
                "_id": context.ids.next(),
                "type": video.source,
                "title": video.title or f"Video {index}",
                "duration": video.duration,
            }
            if video.source == "hosted":
                tab["hosted_url"] = {"url": video.url}
            else:
                tab[f"{video.source}_url"] = video.url
            if video.thumbnail:
                tab["thumbnail"] = {"url": video.thumbnail, "id": ""}
            tabs.append(tab)

        return {
            "tabs": tabs,
            "layout": self._layout(element),
            "show_image_overlay": "yes",
            "show_play_icon": "yes",
            "autoplay_on_load": yes_no(self._autoplay(element)),
            "loop": yes_no(self._loop(element)),
            "show_video_count": "yes",
            "show_duration": "yes",
        }

    @staticmethod
    def _layout(element: DOMNode) -> str:
        classes = element.class_name.lower()
        if "inline" in classes:
            return "inline"
        if "section" in classes:
            return "section"
        return "inline"

    @staticmethod
    def _autoplay(element: DOMNode) -> bool:
        if "data-autoplay" in element.attributes:
            return is_truthy(element.get("data-autoplay"))
        iframe = css.select_one(element, "iframe")
        if iframe is not None and "autoplay=1" in (iframe.src or ""):
            return True
        video = css.select_one(element, "video")
        return video is not None and "autoplay" in video.attributes

    @staticmethod
    def _loop(element: DOMNode) -> bool:
        if "data-loop" in element.attributes:
            return is_truthy(element.get("data-loop"))
        video = css.select_one(element, "video")
        return video is not None and "loop" in video.attributes
