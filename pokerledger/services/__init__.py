from .results_service import FinalRanking, GameResults, compute_game_results, final_rankings

__all__ = ["FinalRanking", "GameResults", "compute_game_results", "final_rankings"]
