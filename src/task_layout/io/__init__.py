from task_layout.io.load_tasks import load_task_records, load_tasks

__all__ = ["load_task_records", "load_tasks"]
