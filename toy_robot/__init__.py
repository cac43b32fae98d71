"""
Toy Robot Simulator.

A robot on a 5x5 table that can be placed, moved and turned, with every
accepted state appended to a history log.

- toy_robot.core.grid           pure grid model
- toy_robot.session             session controller
- toy_robot.storage             storage port + HTTP / local adapters
- toy_robot.main                FastAPI history server
- toy_robot.console             interactive terminal front-end
"""

__version__ = "0.1.0"
