# config.py

import os

# Which menu entries exist in the console.
# The shape mirrors what the backend's /api/v1/menus/user returns, plus the
# roles that may see each leaf. Sections are visible when any child is.
MENU_TREE = [
    # 1. HOME
    {
        "menu_id": "home",
        "menu_name": "首页",
        "route_path": "/welcome",
        "icon": "home",
        "allowed_roles": ["admin", "operator", "auditor"],
        "children": [],
    },

    # 2. BUSINESS (policies, customers)
    {
        "menu_id": "business",
        "menu_name": "业务管理",
        "route_path": "/business",
        "icon": "shop",
        "children": [
            {
                "menu_id": "business-policy",
                "menu_name": "保单管理",
                "route_path": "/business/policy",
                "icon": "policy",
                "allowed_roles": ["admin", "operator"],
                "children": [],
            },
            {
                "menu_id": "business-customer",
                "menu_name": "客户管理",
                "route_path": "/business/customer",
                "icon": "contacts",
                "allowed_roles": ["admin", "operator"],
                "children": [],
            },
        ],
    },

    # 3. SYSTEM (users, roles, menus, companies, config)
    {
        "menu_id": "system",
        "menu_name": "系统管理",
        "route_path": "/system",
        "icon": "system",
        "children": [
            {
                "menu_id": "system-user",
                "menu_name": "用户管理",
                "route_path": "/system/user-management",
                "icon": "user",
                "allowed_roles": ["admin"],
                "children": [],
            },
            {
                "menu_id": "system-role",
                "menu_name": "角色管理",
                "route_path": "/system/role-management",
                "icon": "team",
                "allowed_roles": ["admin"],
                "children": [],
            },
            {
                "menu_id": "system-menu",
                "menu_name": "菜单管理",
                "route_path": "/system/menu-management",
                "icon": "menu",
                "allowed_roles": ["admin"],
                "children": [],
            },
            {
                "menu_id": "system-company",
                "menu_name": "公司管理",
                "route_path": "/system/company-list",
                "icon": "company",
                "allowed_roles": ["admin", "operator"],
                "children": [],
            },
            {
                "menu_id": "system-config",
                "menu_name": "系统配置",
                "route_path": "/system/system-config",
                "icon": "setting",
                "allowed_roles": ["admin"],
                "children": [],
            },
        ],
    },

    # 4. AUDIT (activity log, change records)
    {
        "menu_id": "audit",
        "menu_name": "日志审计",
        "route_path": "/audit",
        "icon": "audit",
        "children": [
            {
                "menu_id": "audit-activity",
                "menu_name": "操作日志",
                "route_path": "/audit/activity-log",
                "icon": "file-text",
                "allowed_roles": ["admin", "auditor"],
                "children": [],
            },
        ],
    },
]

# --- Tab session ---

# Key under which the open tabs are stored for the browser session
TAB_STORAGE_KEY = "yufung_tabs"

HOME_PATH = "/welcome"
LOGIN_PATH = "/user/login"

# The permanent, non-closable first tab
HOME_TAB = {
    "key": "welcome",
    "label": "首页",
    "path": HOME_PATH,
    "closable": False,
    "icon": "home",
}

# Label used when a path has no segments at all
UNTITLED_TAB_LABEL = "新页面"

# Path segment (or whole path) -> tab title
PATH_TITLE_MAP = {
    # System
    "user-management": "用户管理",
    "role-management": "角色管理",
    "menu-management": "菜单管理",
    "company-list": "公司管理",
    "system-config": "系统配置",

    # Business
    "business-policy": "保单管理",
    "business-customer": "客户管理",

    # Other pages
    "activity-log": "操作日志",
    "table-list": "列表页面",
    "welcome": "首页",
    "admin": "管理页面",
    "login": "登录",
    "register": "注册",
    "changePassword": "修改密码",
    "404": "页面未找到",

    # Single segments (sub paths)
    "user": "用户",
    "role": "角色",
    "menu": "菜单",
    "config": "配置",
    "policy": "保单",
    "customer": "客户",
    "company": "公司",
    "system": "系统",
    "business": "业务",
    "management": "管理",
    "list": "列表",
    "detail": "详情",
    "create": "新增",
    "edit": "编辑",
    "update": "更新",
    "delete": "删除",
    "import": "导入",
    "export": "导出",
}

# --- Menu ---

# Menus nested deeper than this are cut off
MAX_MENU_DEPTH = 8

# Fallback locale keys for menus whose route is too short to derive one
MENU_NAME_LOCALE_MAP = {
    "业务管理": "menu.business",
    "保单管理": "menu.business.policy",
    "客户管理": "menu.business.customer",
    "系统管理": "menu.system",
    "用户管理": "menu.system.user",
    "角色管理": "menu.system.role",
    "菜单管理": "menu.system.menu",
    "公司管理": "menu.system.company",
    "仪表板": "menu.dashboard",
    "欢迎": "menu.welcome",
    "首页": "menu.home",
}

# zh-CN labels for locale keys
LOCALE_LABELS = {
    "menu.home": "首页",
    "menu.welcome": "欢迎",
    "menu.dashboard": "仪表板",
    "menu.business": "业务管理",
    "menu.business.policy": "保单管理",
    "menu.business.customer": "客户管理",
    "menu.system": "系统管理",
    "menu.system.user": "用户管理",
    "menu.system.user-management": "用户管理",
    "menu.system.role": "角色管理",
    "menu.system.role-management": "角色管理",
    "menu.system.menu": "菜单管理",
    "menu.system.menu-management": "菜单管理",
    "menu.system.company": "公司管理",
    "menu.system.company-list": "公司管理",
    "menu.system.system-config": "系统配置",
    "menu.audit": "日志审计",
    "menu.audit.activity-log": "操作日志",
}

# Menu icon key -> sidebar glyph
MENU_ICONS = {
    # General
    "home": "🏠",
    "dashboard": "📊",
    "setting": "⚙️",
    "user": "👤",
    "team": "👥",
    "menu": "☰",
    "bank": "🏦",
    "file-text": "📄",
    "contacts": "📇",
    "shopping-cart": "🛒",
    "appstore": "🧩",
    "database": "🗄️",
    "unordered-list": "📋",
    # Keys stored by the backend menu table
    "company": "🏦",
    "policy": "📄",
    "system": "⚙️",
    # System
    "safety": "🛡️",
    "key": "🔑",
    "audit": "🔍",
    "monitor": "🖥️",
    "cloud-server": "☁️",
    "tool": "🛠️",
    # Business
    "shop": "🏪",
    "dollar": "💲",
    "credit-card": "💳",
    "line-chart": "📈",
    "bar-chart": "📊",
    "pie-chart": "🥧",
    # Other
    "folder": "📁",
    "file": "📃",
    "control": "🎛️",
    "search": "🔎",
    "plus": "➕",
    "edit": "✏️",
    "delete": "🗑️",
    "eye": "👁️",
    "reload": "🔄",
}

# Optional menu backend. When unset the static MENU_TREE is used.
MENU_API_URL = os.environ.get("YUFUNG_MENU_API_URL", "")
API_TOKEN = os.environ.get("YUFUNG_API_TOKEN", "")
MENU_API_TIMEOUT = 10
# Seconds a fetched menu tree is reused across reruns
MENU_CACHE_TTL = 300
