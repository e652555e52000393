# justyou/services/resume_tools.py
from justyou.services import claude_api, prompts


async def optimize_objective(job_description: str, current_objective: str) -> str:
    text = await claude_api.call_claude(prompts.objective_prompt(job_description, current_objective))
    return text.strip()


async def optimize_resume(job_description: str, resume_text: str) -> str:
    text = await claude_api.call_claude(prompts.resume_optimizer_prompt(job_description, resume_text))
    return text.strip()
