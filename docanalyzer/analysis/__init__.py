from docanalyzer.analysis.analyzer import Analyzer
from docanalyzer.analysis.base import BaseAnalyzer
from docanalyzer.analysis.factory import AnalyzerFactory
from docanalyzer.analysis.parser import parse_analysis_response

__all__ = ["Analyzer", "AnalyzerFactory", "BaseAnalyzer", "parse_analysis_response"]
