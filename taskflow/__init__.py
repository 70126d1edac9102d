"""TaskFlow backend - task tracking with per-task timers"""
