"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskDraft, TaskList, TaskState)
- task_store.py: in-memory, lock-guarded storage
- task_workflow.py: validation + orchestration of list/get/create/toggle/delete
"""
