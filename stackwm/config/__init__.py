"""
stackwm.config - Configuracion del WM.

    - settings : Settings (margen, workspaces, reglas) y carga desde TOML
    - hotkeys  : Tabla de keybindings y parser de combos
"""
