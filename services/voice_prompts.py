"""
Spoken prompt texts for the cooking console (Mandarin).
"""

from typing import Literal, Optional

from models.cooking import CookingTask

START_PROMPT = "烹饪开始，请按照步骤操作"
PAUSE_PROMPT = "烹饪已暂停"
RESUME_PROMPT = "继续烹饪"
COMPLETE_PROMPT = "恭喜，所有菜品已完成"
NO_MORE_STEPS_PROMPT = "没有更多步骤了"
NO_TEMPERATURE_PROMPT = "当前步骤没有温度要求"


def step_prompt(task: CookingTask) -> str:
    return f"当前步骤：{task.name}，预计{task.duration}分钟"


def remaining_time_prompt(minutes: int) -> str:
    return f"还需要约{minutes}分钟"


def temperature_prompt(task: Optional[CookingTask]) -> str:
    if task is None or task.temperature is None:
        return NO_TEMPERATURE_PROMPT
    return f"{task.name}的温度是{task.temperature}度"


def generate_step_prompt(task: CookingTask, action: Literal["start", "remind", "complete"]) -> str:
    """Prompt for a step starting, a reminder of its duration, or it finishing."""
    if action == "start":
        return f"开始{task.name}，预计{task.duration}分钟"
    if action == "remind":
        return f"请注意，{task.name}还有{task.duration}分钟"
    if action == "complete":
        return f"{task.name}已完成，请进行下一步"
    return ""
