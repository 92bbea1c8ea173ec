"""
Default values for CV-Craft style configs.

Provides the single default table every style lookup falls back to, and the
legacy-field alias table applied once when a config enters the system.

Keys keep the camelCase names used by persisted configs so stored templates
load without translation.
"""

import copy
from typing import Any, Dict, List, Tuple

STYLE_GROUPS = ("colors", "typography", "layout", "components", "pdf", "advanced")

DEFAULT_COLORS = {
    "primary": "#2563eb",
    "onPrimary": "#ffffff",
    "secondary": "#64748b",
    "onSecondary": "#ffffff",
    "tertiary": "#f59e0b",
    "onTertiary": "#ffffff",
    "background": "#ffffff",
    "muted": "#f1f5f9",
    "onMuted": "#334155",
    "text": {
        "primary": "#0f172a",
        "secondary": "#475569",
        "muted": "#94a3b8",
    },
    "borders": "#e2e8f0",
    "links": {
        "default": "#2563eb",
        "hover": "#1d4ed8",
    },
    "custom1": "#8b5cf6",
    "onCustom1": "#ffffff",
    "custom2": "#ec4899",
    "onCustom2": "#ffffff",
    "custom3": "#14b8a6",
    "onCustom3": "#ffffff",
    "custom4": "#f97316",
    "onCustom4": "#ffffff",
    "highlight": "#fef3c7",
    "error": "#dc2626",
    "success": "#16a34a",
}

DEFAULT_TYPOGRAPHY = {
    "baseFontSize": "10pt",
    "availableFonts": [
        "Inter",
        "Roboto",
        "Open Sans",
        "Lato",
        "Montserrat",
        "Poppins",
        "Raleway",
        "Merriweather",
        "Playfair Display",
        "Lora",
    ],
    "fontFamily": {
        "heading": "Inter, system-ui, -apple-system, sans-serif",
        "body": 'Georgia, "Times New Roman", serif',
        "monospace": '"Fira Code", "Courier New", monospace',
    },
    # Multipliers of baseFontSize
    "fontScale": {
        "h1": 3.2,
        "h2": 2.4,
        "h3": 2.0,
        "body": 1.6,
        "small": 1.4,
        "tiny": 1.2,
        "tag": 1.3,
        "dateLine": 1.3,
        "inlineCode": 1.2,
    },
    "fontWeight": {
        "heading": 700,
        "subheading": 600,
        "body": 400,
        "bold": 600,
    },
    "lineHeight": {
        "heading": 1.2,
        "body": 1.6,
        "compact": 1.4,
    },
}

DEFAULT_LAYOUT = {
    "templateType": "two-column",
    "sidebarWidth": "84mm",
    "pageWidth": "210mm",
    "pageMargin": {
        "top": "20mm",
        "right": "20mm",
        "bottom": "20mm",
        "left": "20mm",
    },
    "sectionSpacing": "24px",
    "paragraphSpacing": "12px",
}

# Box model defaults per component. A component that declares any of its own
# margin/padding fields replaces these as a whole (unset edges become 0).
DEFAULT_BOXES = {
    "name": {
        "marginMode": "individual",
        "marginTop": "0px",
        "marginRight": "0px",
        "marginBottom": "8px",
        "marginLeft": "0px",
        "paddingMode": "uniform",
        "paddingUniform": "0px",
    },
    "sectionHeader": {
        "marginMode": "individual",
        "marginTop": "24px",
        "marginRight": "0px",
        "marginBottom": "12px",
        "marginLeft": "0px",
        "paddingMode": "uniform",
        "paddingUniform": "0 0 4px 0",
    },
    "jobTitle": {
        "marginMode": "individual",
        "marginTop": "0px",
        "marginRight": "0px",
        "marginBottom": "4px",
        "marginLeft": "0px",
        "paddingMode": "uniform",
        "paddingUniform": "0px",
    },
    "profilePhoto": {
        "marginMode": "individual",
        "marginTop": "0px",
        "marginRight": "0px",
        "marginBottom": "16px",
        "marginLeft": "0px",
    },
}

DEFAULT_COMPONENTS = {
    "name": {
        "fontWeight": 700,
        "colorKey": "text-primary",
        "colorOpacity": 1.0,
        "letterSpacing": "-0.02em",
        "lineHeight": 1.2,
        "textTransform": "uppercase",
        "fontStyle": "normal",
        "alignment": "left",
        "backgroundColorOpacity": 1.0,
        "borderRadius": "0px",
        "borderStyle": "none",
        "borderWidth": "0px",
        "borderColorOpacity": 1.0,
        "dividerStyle": "none",
        "dividerWidth": "2px",
        "dividerColorKey": "primary",
        "dividerColorOpacity": 1.0,
        "shadow": "none",
    },
    "header": {
        "alignment": "left",
    },
    "contactInfo": {
        "layout": "inline",
        "iconSize": "16px",
        "iconColorKey": "secondary",
        "iconColorOpacity": 1.0,
        "colorKey": "text-secondary",
        "colorOpacity": 1.0,
        "spacing": "12px",
        "fontWeight": 400,
        "letterSpacing": "0em",
        "textTransform": "none",
        "fontStyle": "normal",
        "showIcons": True,
        "separator": "·",
    },
    "profilePhoto": {
        "size": "160px",
        "borderRadius": "50%",
        "borderWidth": "3px",
        "borderStyle": "solid",
        "borderColor": "#e2e8f0",
        "position": "center",
        "shadow": "none",
        "opacity": 1,
        "filter": "none",
    },
    "sectionHeader": {
        "fontWeight": 700,
        "colorKey": "text-primary",
        "colorOpacity": 1.0,
        "letterSpacing": "0.05em",
        "lineHeight": 1.2,
        "textTransform": "uppercase",
        "fontStyle": "normal",
        "backgroundColorOpacity": 1.0,
        "borderRadius": "0px",
        "borderStyle": "none",
        "borderWidth": "0px",
        "borderColorOpacity": 1.0,
        "dividerStyle": "underline",
        "dividerWidth": "2px",
        "dividerColorKey": "primary",
        "dividerColorOpacity": 1.0,
        "shadow": "none",
    },
    "jobTitle": {
        "fontWeight": 600,
        "colorKey": "text-primary",
        "colorOpacity": 1.0,
        "letterSpacing": "0em",
        "lineHeight": 1.3,
        "textTransform": "none",
        "fontStyle": "normal",
        "backgroundColorOpacity": 1.0,
        "borderRadius": "0px",
        "borderStyle": "none",
        "borderWidth": "0px",
        "borderColorOpacity": 1.0,
        "dividerStyle": "none",
        "dividerWidth": "2px",
        "dividerColorKey": "primary",
        "dividerColorOpacity": 1.0,
        "shadow": "none",
    },
    "organizationName": {
        "fontWeight": 500,
        "colorKey": "text-secondary",
        "colorOpacity": 1.0,
        "fontStyle": "normal",
    },
    "keyValue": {
        "labelColorKey": "text-primary",
        "labelWeight": 600,
        "valueColorKey": "text-secondary",
        "valueWeight": 400,
        "separator": ":",
        "spacing": "4px",
    },
    "emphasis": {
        "fontWeight": 600,
        "colorKey": "text-primary",
    },
    "tags": {
        "colorPair": "tertiary",
        "backgroundOpacity": 0.2,
        "textOpacity": 1.0,
        "borderRadius": "4px",
        "padding": "4px 8px",
        "gap": "8px",
        "fontWeight": 500,
        "letterSpacing": "0em",
        "textTransform": "none",
        "fontStyle": "normal",
        "style": "pill",
        "separator": "·",
    },
    "dateLine": {
        "colorKey": "secondary",
        "colorOpacity": 1.0,
        "fontStyle": "italic",
        "fontWeight": 400,
        "alignment": "right",
        "letterSpacing": "0em",
        "textTransform": "none",
        "metaSeparator": "pipe",
    },
    "list": {
        "level1": {"bulletStyle": "disc", "color": "#2563eb", "indent": "20px"},
        "level2": {"bulletStyle": "circle", "color": "#64748b", "indent": "40px"},
        "level3": {"bulletStyle": "square", "color": "#94a3b8", "indent": "60px"},
    },
    "links": {
        "colorOpacity": 1.0,
        "hoverColorOpacity": 1.0,
        "fontSize": "inherit",
        "fontWeight": 500,
        "letterSpacing": "0em",
        "textTransform": "none",
        "fontStyle": "normal",
        "underlineStyle": "always",
    },
    "divider": {
        "style": "solid",
        "color": "#e2e8f0",
        "thickness": "1px",
        "spacing": "16px",
    },
}

DEFAULT_PDF = {
    "pageSize": "A4",
    "orientation": "portrait",
    "printColorAdjust": True,
    "pageNumbers": {
        "enabled": False,
        "position": "bottom-center",
        "format": "Page {page} of {total}",
        "fontSize": "10px",
        "fontWeight": 400,
        "colorKey": "text-secondary",
        "margin": "10mm",
    },
}

DEFAULT_ADVANCED = {
    "customCSS": "",
    "animations": False,
    "shadows": False,
    "iconSet": "phosphor",
}

DEFAULT_STYLE_CONFIG = {
    "colors": DEFAULT_COLORS,
    "typography": DEFAULT_TYPOGRAPHY,
    "layout": DEFAULT_LAYOUT,
    "components": DEFAULT_COMPONENTS,
    "pdf": DEFAULT_PDF,
    "advanced": DEFAULT_ADVANCED,
}

# Legacy field -> current field. Within one container, first listed legacy
# field wins; an explicit current field always wins over any legacy one.
LEGACY_FIELD_ALIASES: List[Tuple[str, str]] = [
    ("colors.accent", "colors.tertiary"),
    ("components.name.color", "components.name.colorKey"),
    ("components.sectionHeader.color", "components.sectionHeader.colorKey"),
    ("components.sectionHeader.dividerColor", "components.sectionHeader.dividerColorKey"),
    ("components.sectionHeader.borderColor", "components.sectionHeader.dividerColorKey"),
    ("components.sectionHeader.backgroundColor", "components.sectionHeader.backgroundColorKey"),
    ("components.jobTitle.color", "components.jobTitle.colorKey"),
    ("components.organizationName.color", "components.organizationName.colorKey"),
    ("components.dateLine.color", "components.dateLine.colorKey"),
    ("components.contactInfo.textColor", "components.contactInfo.colorKey"),
    ("components.contactInfo.iconColor", "components.contactInfo.iconColorKey"),
    ("components.links.color", "components.links.colorKey"),
    ("components.links.hoverColor", "components.links.hoverColorKey"),
    ("components.keyValue.labelColor", "components.keyValue.labelColorKey"),
    ("components.keyValue.valueColor", "components.keyValue.valueColorKey"),
    ("components.emphasis.color", "components.emphasis.colorKey"),
]


def get_default_style_config() -> Dict[str, Any]:
    """
    Get a fresh, complete copy of the default style config.

    Returns:
        Deep copy of DEFAULT_STYLE_CONFIG, safe for callers to mutate
    """
    return copy.deepcopy(DEFAULT_STYLE_CONFIG)


def default_for(path: str) -> Any:
    """
    Look up a default leaf by dotted path (e.g., "colors.text.primary").

    Returns None when the path has no default.
    """
    node: Any = DEFAULT_STYLE_CONFIG
    for key in path.split("."):
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node
