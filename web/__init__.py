"""
Web API for CPU Scheduling Simulator
"""
