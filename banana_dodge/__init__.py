"""
Banana Dodge Package
====================

A monkey in a space helmet dodges bananas falling through the jungle.

This package contains the deterministic game core, the Gymnasium
environment and the renderers. All tunable parameters live in
game_config.yaml.
"""
