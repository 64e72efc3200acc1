"""
Configuration for the asteroids game and its RL experiments
Gameplay constants, environment settings, reward shaping and training settings
"""

# ==============================================================================
# GAMEPLAY
# Passed to game.asteroids.GameConfig; rates are per second
# ==============================================================================

GAME_CONFIG = {
    "ship_size": 30,           # Height of the ship triangle
    "ship_thrust": 300.0,      # Acceleration in px/s^2
    "friction": 0.7,           # 0 = no friction, 1 = lots of friction
    "turn_speed": 360.0,       # Degrees per second
    "ship_explode_dur": 0.3,   # Explosion duration in seconds
    "ship_inv_dur": 3.0,       # Invincibility after respawn in seconds
    "ship_blink_dur": 0.1,     # Blink period during invincibility
    "start_lives": 3,
    "bullet_speed": 500.0,     # px/s
    "bullet_max": 10,          # Max bullets on screen
    "bullet_lifetime": 1.0,    # Seconds
    "shoot_cooldown": 0.1,     # Seconds between shots
    "asteroid_num": 3,         # Starting number of asteroids
    "asteroid_size": 100,      # Starting size of asteroids in px
    "asteroid_speed": 50.0,    # Max starting speed in px/s
    "asteroid_vert": 10,       # Average number of vertices
    "asteroid_jag": 0.4,       # Jaggedness (0 = none, 1 = lots)
    "asteroid_pts_lge": 20,
    "asteroid_pts_med": 50,
    "asteroid_pts_sml": 100,
}

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - too slow with parallel envs
    "width": 800,
    "height": 600,
    "dt": 1/30,
    "max_steps": 3600,  # 120 seconds at 30 FPS
    "k_asteroids": 8,
    "game_config": GAME_CONFIG,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# BASELINE: score-driven with moderate penalties
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Score-driven reward with moderate life penalty",
    "R_SCORE": 0.01,     # Per point scored (large=20, medium=50, small=100)
    "R_LEVEL": 5.0,      # Clearing a level
    "R_LIFE": 3.0,       # Penalty for losing a life
    "R_SHOT": 0.01,      # Penalty per bullet (encourage aiming)
    "R_TIME": 0.001,     # Small time penalty
    "R_GAME_OVER": 5.0,  # Penalty when the game ends
}

# SURVIVAL: staying alive matters more than points
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Prioritize survival - heavy life/game-over penalties",
    "R_SCORE": 0.005,
    "R_LEVEL": 3.0,
    "R_LIFE": 10.0,
    "R_SHOT": 0.02,
    "R_TIME": 0.0,
    "R_GAME_OVER": 20.0,
}

# AGGRESSIVE: clear the field fast
REWARD_CONFIG_AGGRESSIVE = {
    "name": "aggressive",
    "description": "Prioritize destroying asteroids and clearing levels",
    "R_SCORE": 0.03,
    "R_LEVEL": 10.0,
    "R_LIFE": 1.0,
    "R_SHOT": 0.0,
    "R_TIME": 0.002,
    "R_GAME_OVER": 2.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "aggressive": REWARD_CONFIG_AGGRESSIVE,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}


def get_env_kwargs(reward_config: str = "baseline"):
    """ENV_CONFIG plus the named reward shaping"""
    if reward_config not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {reward_config}")
    env_kwargs = ENV_CONFIG.copy()
    env_kwargs["reward_config"] = REWARD_CONFIGS[reward_config]
    return env_kwargs
