"""Utility helpers for plugin-updater."""

from plugin_updater.utils.datetime_utils import is_epoch, parse_release_date

__all__ = ["is_epoch", "parse_release_date"]
