"""TrainTrack package.

Organized by feature modules (users, trainings, trainees, attendance, reports)
with a thin Flask API layer on top of service and repository layers.
"""
