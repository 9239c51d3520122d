"""Messages - centralized locale-specific text and item display names.

Invariants:
    - All strings are pure data (no IO, no computation beyond formatting)
    - Covers every Locale member
    - display_name never returns an empty string
"""

from splaroulette.core.domain_types import CatalogItem, CatalogType, Locale, Team

# Preferred key inside a catalog item's name map, per locale
_NAME_LOCALE: dict[Locale, str] = {
    Locale.JA: "ja_JP",
    Locale.EN: "en_US",
}

_MEMBER_PLACEHOLDER: dict[Locale, str] = {
    Locale.JA: "メンバー{index}",
    Locale.EN: "Member {index}",
}

_TYPE_NAMES: dict[Locale, dict[CatalogType, str]] = {
    Locale.JA: {
        CatalogType.RULE: "ルール",
        CatalogType.STAGE: "ステージ",
        CatalogType.WEAPON: "ブキ",
    },
    Locale.EN: {
        CatalogType.RULE: "rule",
        CatalogType.STAGE: "stage",
        CatalogType.WEAPON: "weapon",
    },
}

_TEAM_NAMES: dict[Locale, dict[Team, str]] = {
    Locale.JA: {Team.ALPHA: "アルファグループ", Team.BRAVO: "ブラボーグループ"},
    Locale.EN: {Team.ALPHA: "Alpha group", Team.BRAVO: "Bravo group"},
}

_EMPTY_POOL: dict[Locale, str] = {
    Locale.JA: "利用可能な{type_name}がありません",
    Locale.EN: "No {type_name} available",
}

_LOAD_FAILED: dict[Locale, str] = {
    Locale.JA: "エラー: データを読み込めません",
    Locale.EN: "Error: could not load data",
}

_REFRESH_FAILED: dict[Locale, str] = {
    Locale.JA: "更新に失敗しました",
    Locale.EN: "Refresh failed",
}

_INVALID_REQUEST: dict[Locale, str] = {
    Locale.JA: "リクエストの内容が正しくありません",
    Locale.EN: "Invalid request data",
}

_INTERNAL_ERROR: dict[Locale, str] = {
    Locale.JA: "予期しないエラーが発生しました",
    Locale.EN: "An unexpected error occurred",
}


def member_placeholder(index: int, locale: Locale = Locale.JA) -> str:
    return _MEMBER_PLACEHOLDER[locale].format(index=index)


def type_name(catalog_type: CatalogType, locale: Locale = Locale.JA) -> str:
    return _TYPE_NAMES[locale][catalog_type]


def team_name(team: Team, locale: Locale = Locale.JA) -> str:
    return _TEAM_NAMES[locale][team]


def empty_pool_message(catalog_type: CatalogType, locale: Locale = Locale.JA) -> str:
    return _EMPTY_POOL[locale].format(type_name=type_name(catalog_type, locale))


def load_failed_message(locale: Locale = Locale.JA) -> str:
    return _LOAD_FAILED[locale]


def refresh_failed_message(locale: Locale = Locale.JA) -> str:
    return _REFRESH_FAILED[locale]


def invalid_request_message(locale: Locale = Locale.JA) -> str:
    return _INVALID_REQUEST[locale]


def internal_error_message(locale: Locale = Locale.JA) -> str:
    return _INTERNAL_ERROR[locale]


def display_name(item: CatalogItem, locale: Locale = Locale.JA) -> str:
    """Localized name, then any string in the name map, then the key."""
    name = item.name
    if isinstance(name, dict):
        preferred = name.get(_NAME_LOCALE[locale])
        if preferred:
            return preferred
        for value in name.values():
            if isinstance(value, str) and value:
                return value
    elif isinstance(name, str) and name:
        return name
    return item.key or "Unknown"
