"""
Endless Runner Package
======================

A side-scrolling endless runner: the player jumps over incoming obstacles,
collects timed power-ups and scores until an unshielded collision ends the run.

- runner_core: deterministic per-frame simulation, renderer and Gymnasium env
- game_config.yaml: every tunable constant
"""
