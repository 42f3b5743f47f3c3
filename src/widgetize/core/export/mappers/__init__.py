"""Built-in Elementor widget mappers."""

from widgetize.core.export.base import WidgetMapper
from widgetize.core.export.mappers.alert import AlertMapper
from widgetize.core.export.mappers.basic import (
    BlockquoteMapper,
    ButtonMapper,
    HeadingMapper,
    HtmlFallbackMapper,
    IconListMapper,
    ImageMapper,
    TextEditorMapper,
)
from widgetize.core.export.mappers.call_to_action import CallToActionMapper
from widgetize.core.export.mappers.carousel import ImageCarouselMapper
from widgetize.core.export.mappers.flip_box import FlipBoxMapper
from widgetize.core.export.mappers.gallery import ImageGalleryMapper
from widgetize.core.export.mappers.icon_box import IconBoxMapper
from widgetize.core.export.mappers.posts_grid import PostsGridMapper
from widgetize.core.export.mappers.price_list import PriceListMapper
from widgetize.core.export.mappers.price_table import PriceTableMapper
from widgetize.core.export.mappers.progress import ProgressBarMapper
from widgetize.core.export.mappers.social_icons import SocialIconsMapper
from widgetize.core.export.mappers.star_rating import StarRatingMapper
from widgetize.core.export.mappers.tabs import TabsMapper, ToggleMapper
from widgetize.core.export.mappers.video_playlist import VideoPlaylistMapper


def builtin_mappers() -> list[WidgetMapper]:
    """Fresh instances of every built-in mapper."""
    return [
        AlertMapper(),
        TabsMapper(),
        ToggleMapper(),
        ImageCarouselMapper(),
        PostsGridMapper(),
        PriceListMapper(),
        StarRatingMapper(),
        VideoPlaylistMapper(),
        IconBoxMapper(),
        ImageGalleryMapper(),
        SocialIconsMapper(),
        ProgressBarMapper(),
        PriceTableMapper(),
        CallToActionMapper(),
        FlipBoxMapper(),
        HeadingMapper(),
        TextEditorMapper(),
        ImageMapper(),
        ButtonMapper(),
        BlockquoteMapper(),
        IconListMapper(),
        HtmlFallbackMapper(),
    ]


__all__ = [
    "builtin_mappers",
    "AlertMapper",
    "TabsMapper",
    "ToggleMapper",
    "ImageCarouselMapper",
    "PostsGridMapper",
    "PriceListMapper",
    "StarRatingMapper",
    "VideoPlaylistMapper",
    "IconBoxMapper",
    "ImageGalleryMapper",
    "SocialIconsMapper",
    "ProgressBarMapper",
    "PriceTableMapper",
    "CallToActionMapper",
    "FlipBoxMapper",
    "HeadingMapper",
    "TextEditorMapper",
    "ImageMapper",
    "ButtonMapper",
    "BlockquoteMapper",
    "IconListMapper",
    "HtmlFallbackMapper",
]
