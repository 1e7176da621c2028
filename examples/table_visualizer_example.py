from saliency_visualizer import SaliencyTableVisualizer

pairs = '[["Go", 19.6], ["\\u0120press", 16.6], ["\\u0120that", 8.4], ["\\u0120switch", 12.0]]'

table_vis = SaliencyTableVisualizer("fire", sort_by_value=True)
print(table_vis.visualize(pairs, output_format="csv"))
