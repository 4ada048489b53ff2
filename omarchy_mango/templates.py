"""Output templates for every MangoWC theme file.

Placeholders use :class:`string.Template` syntax. Base colours are named
after their palette key (``${primary_bg}``), terminal colours after their
intensity and colour name (``${bright_red}``). ``${theme_name}`` and
``${generated_at}`` are available everywhere.
"""

from __future__ import annotations

from string import Template
from typing import Final

MANGOWC_CONFIG: Final = Template("""\
# MangoWC Theme: ${theme_name}
# Converted from Omarchy theme
# Generated on: ${generated_at}

# Window Manager Colors
window_border_color_active ${primary_accent}
window_border_color_inactive ${tertiary_bg}
window_border_color_urgent ${error}

# Background Colors
background_color ${primary_bg}

# Text Colors
text_color_active ${text_primary}
text_color_inactive ${text_secondary}
text_color_urgent ${error}

# Selection Colors
selection_color ${selection_bg}
selection_text_color ${text_primary}

# Tag Colors
tag_bg_color ${secondary_bg}
tag_fg_color ${text_secondary}
tag_active_bg_color ${primary_accent}
tag_active_fg_color ${primary_bg}
tag_urgent_bg_color ${error}
tag_urgent_fg_color ${text_primary}

# Layout Colors
layout_border_color ${tertiary_accent}
layout_fg_color ${text_primary}

# Bar Colors
bar_bg_color ${secondary_bg}
bar_fg_color ${text_primary}
bar_border_color ${tertiary_bg}

# Notification Colors
notification_bg_color ${secondary_bg}
notification_fg_color ${text_primary}
notification_border_color ${primary_accent}

# Prompt Colors
prompt_bg_color ${tertiary_bg}
prompt_fg_color ${text_primary}
prompt_border_color ${primary_accent}

# State Colors
state_active_color ${success}
state_urgent_color ${error}
state_inactive_color ${text_dim}
""")

WAYBAR_STYLE: Final = Template("""\
/* Waybar Theme: ${theme_name} */
/* Converted from Omarchy theme */
/* Generated on: ${generated_at} */

window {
    background-color: ${secondary_bg};
    color: ${text_primary};
    border-radius: 0px;
    border: 1px solid ${tertiary_bg};
}

#waybar {
    background-color: ${secondary_bg};
    color: ${text_primary};
    border-bottom: 1px solid ${tertiary_bg};
}

#workspaces button {
    padding: 0 5px;
    background-color: ${tertiary_bg};
    color: ${text_secondary};
    border: 1px solid ${tertiary_accent};
}

#workspaces button.active {
    background-color: ${primary_accent};
    color: ${primary_bg};
}

#workspaces button.urgent {
    background-color: ${error};
    color: ${text_primary};
}

#mode {
    background-color: ${primary_accent};
    color: ${primary_bg};
}

#clock, #battery, #cpu, #memory, #disk, #temperature, #backlight,
#network, #pulseaudio, #custom-media, #tray, #mode, #idle_inhibitor,
#scratchpad, #mpd {
    padding: 0 10px;
    margin: 0 5px;
    background-color: ${tertiary_bg};
    color: ${text_primary};
}

#clock {
    background-color: ${tertiary_accent};
}

#battery.charging {
    color: ${success};
}

#battery.warning:not(.charging) {
    color: ${warning};
}

#battery.critical:not(.charging) {
    color: ${error};
}
""")

ALACRITTY_CONFIG: Final = Template("""\
# Alacritty Theme: ${theme_name}
# Converted from Omarchy theme
# Generated on: ${generated_at}

[colors.primary]
background = "${primary_bg}"
foreground = "${text_primary}"

[colors.cursor]
text = "${primary_bg}"
cursor = "${primary_accent}"

[colors.normal]
black = "${normal_black}"
red = "${normal_red}"
green = "${normal_green}"
yellow = "${normal_yellow}"
blue = "${normal_blue}"
magenta = "${normal_magenta}"
cyan = "${normal_cyan}"
white = "${normal_white}"

[colors.bright]
black = "${bright_black}"
red = "${bright_red}"
green = "${bright_green}"
yellow = "${bright_yellow}"
blue = "${bright_blue}"
magenta = "${bright_magenta}"
cyan = "${bright_cyan}"
white = "${bright_white}"

[colors.dim]
black = "${dim_black}"
red = "${dim_red}"
green = "${dim_green}"
yellow = "${dim_yellow}"
blue = "${dim_blue}"
magenta = "${dim_magenta}"
cyan = "${dim_cyan}"
white = "${dim_white}"
""")

KITTY_CONFIG: Final = Template("""\
# Kitty Theme: ${theme_name}
# Converted from Omarchy theme
# Generated on: ${generated_at}

foreground ${text_primary}
background ${primary_bg}
cursor ${primary_accent}

color0 ${normal_black}
color1 ${normal_red}
color2 ${normal_green}
color3 ${normal_yellow}
color4 ${normal_blue}
color5 ${normal_magenta}
color6 ${normal_cyan}
color7 ${normal_white}

color8 ${bright_black}
color9 ${bright_red}
color10 ${bright_green}
color11 ${bright_yellow}
color12 ${bright_blue}
color13 ${bright_magenta}
color14 ${bright_cyan}
color15 ${bright_white}
""")

MAKO_CONFIG: Final = Template("""\
# Mako Theme: ${theme_name}
# Converted from Omarchy theme
# Generated on: ${generated_at}

background-color=${secondary_bg}
text-color=${text_primary}
border-color=${primary_accent}
progress-color=${primary_accent}

default-timeout=5000
border-size=2
padding=8
margin=8

[urgency=low]
background-color=${tertiary_bg}
text-color=${text_secondary}

[urgency=high]
background-color=${error}
text-color=${text_primary}
border-color=${warning}

[urgency=critical]
background-color=${error}
text-color=${text_primary}
border-color=${error}
""")

SWAYOSD_STYLE: Final = Template("""\
/* SwayOSD Theme: ${theme_name} */
/* Converted from Omarchy theme */
/* Generated on: ${generated_at} */

window {
    background-color: ${secondary_bg};
    border: 1px solid ${primary_accent};
    border-radius: 8px;
    color: ${text_primary};
}

.progressbar {
    background-color: ${tertiary_bg};
    border: 1px solid ${tertiary_accent};
    border-radius: 4px;
}

.progressbar-fill {
    background-color: ${primary_accent};
    border-radius: 3px;
}

.label {
    color: ${text_primary};
}

.value {
    color: ${secondary_accent};
}
""")

README: Final = Template("""\
# ${theme_name} Theme for MangoWC

This theme was automatically converted from an Omarchy theme.

## Theme Information

- **Name**: ${theme_name}
- **Generated**: ${generated_at}
- **Source**: Omarchy theme system
- **Target**: MangoWC Wayland compositor

## Color Palette

| Color Name | Hex Code |
|------------|----------|
${color_rows}

## Installation

1. Run the installation script:
   ```bash
   ./install.sh
   ```

2. Add the following to your MangoWC configuration file:
   ```
   @include ~/.config/mango/themes/${theme_name}/config.conf
   ```

3. Restart MangoWC to apply the theme.

## Included Components

${component_rows}

## Customization

You can customize the theme by editing the generated configuration files.

## License

This theme keeps the license of the original Omarchy theme.
""")

# Copied verbatim; the shell variables are not placeholders.
INSTALL_SCRIPT: Final = """\
#!/usr/bin/env bash
# Theme Installation Script
# Generated by the Omarchy to MangoWC theme converter

set -euo pipefail

SCRIPT_DIR="$(cd "$(dirname "${BASH_SOURCE[0]}")" && pwd -P)"
THEME_NAME="$(basename "$SCRIPT_DIR")"
CONFIG_DIR="$HOME/.config/mango"

GREEN='\\033[0;32m'
YELLOW='\\033[1;33m'
NC='\\033[0m'

log_info() {
    echo -e "${YELLOW}[INFO]${NC} $1"
}

log_success() {
    echo -e "${GREEN}[SUCCESS]${NC} $1"
}

install_theme() {
    log_info "Installing MangoWC theme: $THEME_NAME"

    mkdir -p "$CONFIG_DIR/themes"
    local themes_dir target
    themes_dir="$(cd "$CONFIG_DIR/themes" && pwd -P)"
    target="$themes_dir/$THEME_NAME"
    if [[ ! "$SCRIPT_DIR" -ef "$target" ]]; then
        rm -rf "$target"
        cp -r "$SCRIPT_DIR" "$themes_dir/"
    fi

    if [[ ! -L "$CONFIG_DIR/themes/current" ]]; then
        ln -sfn "$CONFIG_DIR/themes/$THEME_NAME" "$CONFIG_DIR/themes/current"
        log_info "Created symlink: $CONFIG_DIR/themes/current -> $THEME_NAME"
    fi

    log_success "Theme installed successfully!"
    log_info "To activate the theme, add the following to your MangoWC config:"
    log_info "@include $CONFIG_DIR/themes/$THEME_NAME/config.conf"
}

backup_config() {
    local config_file="$CONFIG_DIR/config.conf"
    if [[ -f "$config_file" ]]; then
        local backup_file
        backup_file="$config_file.backup.$(date +%Y%m%d_%H%M%S)"
        cp "$config_file" "$backup_file"
        log_info "Backed up existing configuration to: $backup_file"
    fi
}

main() {
    backup_config
    install_theme

    log_success "Installation completed!"
    log_info "Restart MangoWC to apply the theme changes."
}

main "$@"
"""
