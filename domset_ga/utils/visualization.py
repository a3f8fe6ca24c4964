
import matplotlib.pyplot as plt
import networkx as nx
import pandas as pd


def draw_graph(graph, dominating_set, filePath: str = "graph.png", title: str = "Graph"):
    """
    Draw the graph with the dominating set highlighted.

    Args:
        graph: Graph to draw (0-based)
        dominating_set: Vertices in the dominating set (0-based)
        filePath: Output file path for the image
        title: Title for the figure
    """
    G = graph.to_networkx()
    # Label nodes with their 1-based PACE ids
    G = nx.relabel_nodes(G, {v: v + 1 for v in G.nodes})
    members = {v + 1 for v in dominating_set}

    num_nodes = len(G.nodes)
    size = min(15, num_nodes // 10 + 5)
    fig = plt.figure(figsize=(size, size))

    # Choose a layout dynamically based on graph size
    if num_nodes > 200:
        pos = nx.kamada_kawai_layout(G)
    elif num_nodes > 50:
        pos = nx.spring_layout(G, k=3 / (num_nodes ** 0.5), seed=42)
    else:
        pos = nx.spring_layout(G, seed=42)

    node_size = max(50, 800 - num_nodes * 2)
    font_size = max(6, 12 - num_nodes // 50)
    colorList = ["red" if v in members else "lightgray" for v in G.nodes]
    nx.draw(G, pos, with_labels=True, node_color=colorList, edge_color="gray",
            node_size=node_size, font_size=font_size, alpha=0.9)

    plt.title(f"{title} (|D| = {len(members)})")
    fig.savefig(filePath, format="png", bbox_inches="tight")
    plt.close(fig)


def plot_convergence(history_csv: str, filePath: str = "convergence.png"):
    """Step plot of the champion size over wall-clock time, read from a history CSV."""
    df = pd.read_csv(history_csv)
    fig, ax = plt.subplots()
    ax.step(df["Time"], df["Fitness"], where="post")
    ax.set_title("Champion size")
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Dominating set size")
    fig.savefig(filePath, bbox_inches="tight")
    plt.close(fig)
    return df
