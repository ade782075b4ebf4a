"""
Utility modules
"""

from .input_parser import InputParser
from .visualization import Visualizer
from .quiz import QuizQuestion, QUESTION_POOL, draw_questions, score_answers

__all__ = ['InputParser', 'Visualizer', 'QuizQuestion', 'QUESTION_POOL',
           'draw_questions', 'score_answers']
