"""
常用事件名常量，避免各模块手写字符串时拼写不一致。
"""

from __future__ import annotations


class Events:
    # 用户
    USER_LOGIN = "user:login"
    USER_LOGOUT = "user:logout"
    USER_PROFILE_UPDATE = "user:profile:update"

    # 界面
    SCREEN_CHANGE = "ui:screen:change"
    MODAL_OPEN = "ui:modal:open"
    MODAL_CLOSE = "ui:modal:close"
    NOTIFICATION_ADD = "ui:notification:add"
    NOTIFICATION_REMOVE = "ui:notification:remove"

    # 游戏
    GAME_START = "game:start"
    GAME_END = "game:end"
    SPIN_START = "game:spin:start"
    SPIN_END = "game:spin:end"
    TROPHY_UNLOCK = "game:trophy:unlock"

    # 收藏
    TROPHIES_UPDATE = "collection:trophies:update"
    SHOWCASE_UPDATE = "collection:showcase:update"
    FILTERS_CHANGE = "collection:filters:change"

    # 管理后台
    ADMIN_USER_UPDATE = "admin:user:update"
    ADMIN_CONTENT_UPDATE = "admin:content:update"
    ADMIN_SETTINGS_UPDATE = "admin:settings:update"

    # 组件注册表生命周期
    COMPONENT_CREATED = "component:created"
    COMPONENT_DESTROYED = "component:destroyed"
    REGISTRY_INITIALIZED = "registry:initialized"
    REGISTRY_DESTROYED = "registry:destroyed"

    @classmethod
    def all(cls) -> dict[str, str]:
        return {k: v for k, v in vars(cls).items() if k.isupper() and isinstance(v, str)}
