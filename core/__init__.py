"""
Core modules for CPU Scheduling Simulator
"""

from .process import (Process, ProcessSet, ScheduledProcess, InvalidInputError,
                      SEED_PROCESSES, create_seed_processes, create_process_copy)
from .scheduler_base import (BaseScheduler, SchedulerStats, GanttEntry, Metrics,
                             Discipline, DispatchMode, IDLE_PID, calculate_metrics)
from .comparison import ComparisonBoard

__all__ = [
    'Process',
    'ProcessSet',
    'ScheduledProcess',
    'InvalidInputError',
    'SEED_PROCESSES',
    'create_seed_processes',
    'create_process_copy',
    'BaseScheduler',
    'SchedulerStats',
    'GanttEntry',
    'Metrics',
    'Discipline',
    'DispatchMode',
    'IDLE_PID',
    'calculate_metrics',
    'ComparisonBoard'
]
