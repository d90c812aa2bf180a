"""
Configuration for the shape shooter
Gameplay constants, environment parameters and reward weights
"""

# ==============================================================================
# GAMEPLAY (fed to GameSettings.from_dict; any omitted key keeps its default)
# ==============================================================================

GAME_CONFIG = {
    "width": 800,
    "height": 600,
    "player_size": 40,
    "opponent_size": 35,
    "boss_size": 50,
    "bullet_size": 8,
    "powerup_size": 20,
    "player_speed": 5,
    "opponent_speed": 2,
    "boss_speed": 4,        # double the opponent speed
    "bullet_speed": 7,
    "initial_lives": 3,
    "death_duration_ms": 2000,
    "shoot_cooldown_ms": 300,
    "rapid_fire_cooldown_ms": 150,
    "boss_interval_ms": 1500,   # boss shoots faster than opponents
    "powerup_chance_opponent": 0.3,
    "powerup_chance_boss": 0.7,
    "replacement_chance": 0.5,
    "shield_duration_ms": 5000,
    "rapid_fire_duration_ms": 5000,
}

# ==============================================================================
# ENVIRONMENT
# ==============================================================================

ENV_CONFIG = {
    # "render_mode": None,
    "tick_ms": 1000 / 60,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_enemies": 3,
    "b_bullets": 5,
    "p_power_ups": 2,
    "allow_pause": False,
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG = {
    "R_KILL": 1.0,       # any enemy killed
    "R_BOSS": 2.0,       # extra for the boss
    "R_LIFE": 2.0,       # penalty per life lost
    "R_POWERUP": 0.5,    # power-up collected
    "R_SHOT": 0.01,      # penalty per shot fired
    "R_TIME": 0.001,     # small time penalty
    "R_VICTORY": 10.0,
    "R_DEFEAT": 5.0,
}

# ==============================================================================
# PERSISTENCE
# ==============================================================================

HIGHSCORE_PATH = "~/.shape_shooter/highscore.json"
