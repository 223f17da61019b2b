# path: src/runtime/__init__.py

"""
Mod execution runtime.

- bootstrap:     fresh-context setup (defines, mods table, data loader)
- settings_pass: settings.lua for every mod -> settings snapshot
- coordinator:   ModLoader, the two-phase settings/data load
- report:        RunReport of everything skipped along the way
"""
